class SemanticPointer:
    """A dotted message id built by attribute access, e.g. L.cli.error.generate."""

    def __init__(self, path: str = ""):
        # Name-mangled so message ids may contain a 'path' segment.
        self.__path = path

    def __getattr__(self, name: str) -> "SemanticPointer":
        return SemanticPointer(f"{self.__path}.{name}" if self.__path else name)

    def __str__(self) -> str:
        return self.__path

    def __repr__(self) -> str:
        return f"<SemanticPointer: '{self.__path}'>"


L = SemanticPointer()
