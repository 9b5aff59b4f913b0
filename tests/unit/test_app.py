import io
from pathlib import Path
from typing import List, Sequence

import pytest

from interfacer.app import InterfacerApp
from interfacer.config import InterfacerConfig
from interfacer.needle import L
from interfacer.spec import (
    ExtractionResult,
    GenerateOptions,
    Query,
    UsageError,
)
from interfacer.test_utils import SpyBus


class FakeExtractor:
    def __init__(self, result: ExtractionResult):
        self.result = result
        self.queries: List[Query] = []

    def extract(self, query: Query, include_private: bool) -> ExtractionResult:
        self.queries.append(query)
        return self.result


class FakeExtractorFactory:
    def __init__(self, result: ExtractionResult):
        self.extractor = FakeExtractor(result)
        self.search_paths: List[Path] = []

    def __call__(self, search_paths: Sequence[Path]) -> FakeExtractor:
        self.search_paths = list(search_paths)
        return self.extractor


REPO_RESULT = ExtractionResult(methods=["def get(self, id: str) -> Item: ..."])


@pytest.fixture
def svc_root(workspace_factory):
    return (
        workspace_factory.with_package("svc")
        .with_source("svc/repo.py", "class Repo: ...")
        .build()
    )


def make_app(root: Path, factory: FakeExtractorFactory, **kwargs) -> InterfacerApp:
    return InterfacerApp(root_path=root, extractor_factory=factory, **kwargs)


def test_generate_builds_query_from_resolved_module(svc_root):
    factory = FakeExtractorFactory(REPO_RESULT)
    app = make_app(svc_root, factory)

    payload = app.generate(GenerateOptions("./svc", "Repo", "svc.RepoIface"))

    assert factory.extractor.queries == [Query("svc", "Repo")]
    text = payload.decode("utf-8")
    assert "# package: svc\n" in text
    assert "class RepoIface(Protocol):" in text
    assert '"""RepoIface is an interface generated for "svc.Repo"."""' in text
    assert "    def get(self, id: str) -> Item: ...\n" in text


def test_search_paths_order(svc_root):
    factory = FakeExtractorFactory(REPO_RESULT)
    config = InterfacerConfig(search_paths=[str(svc_root / "src")])
    app = make_app(svc_root, factory, config=config)

    app.generate(GenerateOptions("./svc", "Repo", "RepoIface"))

    assert factory.search_paths == [
        svc_root.resolve(),
        svc_root / "src",
        svc_root,
    ]


def test_dotted_module_is_not_resolved_on_disk(tmp_path):
    factory = FakeExtractorFactory(REPO_RESULT)
    app = make_app(tmp_path, factory)

    app.generate(GenerateOptions("acme.store", "Repo", "RepoIface"))

    assert factory.extractor.queries == [Query("acme.store", "Repo")]
    assert factory.search_paths == [tmp_path]


@pytest.mark.parametrize(
    "options, message",
    [
        (GenerateOptions("", "Repo", "X"), "empty -for option value"),
        (GenerateOptions("./svc", "", "X"), "empty -type option value"),
        (GenerateOptions("./svc", "Repo", ""), "empty -as option value"),
        (GenerateOptions("./svc", "Repo", "X", output=""), "empty -out option value"),
        (
            GenerateOptions("./svc", "Repo", "bad pkg.RepoIface"),
            "invalid package name 'bad pkg'",
        ),
        (GenerateOptions("./svc", "Repo", ".RepoIface"), "invalid package name"),
    ],
)
def test_invalid_options_are_rejected_before_any_work(svc_root, options, message):
    factory = FakeExtractorFactory(REPO_RESULT)
    app = make_app(svc_root, factory)

    with pytest.raises(UsageError, match=message):
        app.generate(options)
    assert factory.extractor.queries == []


def test_run_generate_to_stdout(svc_root, monkeypatch):
    spy_bus = SpyBus()
    stream = io.BytesIO()
    app = make_app(svc_root, FakeExtractorFactory(REPO_RESULT), stdout=stream)

    with spy_bus.patch(monkeypatch):
        payload = app.run_generate(GenerateOptions("./svc", "Repo", "RepoIface"))

    assert stream.getvalue() == payload
    spy_bus.assert_id_called(L.generate.extract.done, level="debug")
    assert not [m for m in spy_bus.get_messages() if m["level"] == "success"]


def test_run_generate_to_file(svc_root, monkeypatch):
    spy_bus = SpyBus()
    stream = io.BytesIO()
    target = svc_root / "svc" / "repo_iface.py"
    app = make_app(svc_root, FakeExtractorFactory(REPO_RESULT), stdout=stream)

    with spy_bus.patch(monkeypatch):
        payload = app.run_generate(
            GenerateOptions("./svc", "Repo", "svc.RepoIface", output=str(target))
        )

    assert target.read_bytes() == payload
    assert stream.getvalue() == b""
    spy_bus.assert_id_called(L.generate.file.success, level="success")
