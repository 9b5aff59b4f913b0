from interfacer.cli.main import app

app(prog_name="interfacer")
