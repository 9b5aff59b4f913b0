import pytest

from interfacer.app import GENERATED_MARKER, InterfaceRenderer
from interfacer.spec import RenderError, RenderModel

EXPECTED_REPO_IFACE = '''\
# Code generated by interfacer; DO NOT EDIT.
# package: svc

from __future__ import annotations

from typing import Protocol


class RepoIface(Protocol):
    """RepoIface is an interface generated for "svc.Repo"."""

    def get(self, id: str) -> Item: ...
'''


def make_model(**overrides) -> RenderModel:
    values = dict(
        package_name="svc",
        interface_name="RepoIface",
        source_type='"svc.Repo"',
        dependencies=[],
        methods=["def get(self, id: str) -> Item: ..."],
    )
    values.update(overrides)
    return RenderModel(**values)


def test_render_single_method():
    output = InterfaceRenderer().render(make_model())

    assert output.decode("utf-8") == EXPECTED_REPO_IFACE


def test_render_is_deterministic():
    renderer = InterfaceRenderer()

    assert renderer.render(make_model()) == renderer.render(make_model())


def test_render_without_package_or_methods():
    output = InterfaceRenderer().render(
        make_model(package_name="", methods=[])
    ).decode("utf-8")

    assert output.startswith(GENERATED_MARKER + "\n\n")
    assert "# package:" not in output
    assert output.endswith(
        'class RepoIface(Protocol):\n'
        '    """RepoIface is an interface generated for "svc.Repo"."""\n'
    )


def test_render_imports_and_preserves_method_order():
    model = make_model(
        dependencies=["collections.abc", "svc.models"],
        methods=[
            "def put(self, item: svc.models.Item) -> None: ...",
            "@property\ndef size(self) -> int: ...",
            "async def close(self) -> None: ...",
        ],
    )

    output = InterfaceRenderer().render(model).decode("utf-8")

    assert (
        "from typing import Protocol\n\nimport collections.abc\nimport svc.models\n"
        in output
    )
    put_at = output.index("def put(")
    size_at = output.index("    @property\n    def size(self) -> int: ...")
    close_at = output.index("    async def close(self) -> None: ...")
    assert put_at < size_at < close_at


def test_render_invalid_method_text_is_a_render_error():
    model = make_model(methods=["def get(self, id: str) -> : ..."])

    with pytest.raises(RenderError, match="not valid Python"):
        InterfaceRenderer().render(model)


def test_render_invalid_interface_name_is_a_render_error():
    with pytest.raises(RenderError):
        InterfaceRenderer().render(make_model(interface_name="Repo Iface"))


class UpperCanonicalizer:
    def format(self, source: bytes) -> bytes:
        return source.upper()


def test_render_delegates_to_canonicalizer():
    renderer = InterfaceRenderer(canonicalizer=UpperCanonicalizer())

    expected = renderer.assemble(make_model()).upper().encode("utf-8")
    assert renderer.render(make_model()) == expected
