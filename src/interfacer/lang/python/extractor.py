import ast
import builtins
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional, Sequence, Set, Union, cast

import griffe

from interfacer.spec import (
    Argument,
    ArgumentKind,
    ExtractionError,
    ExtractionResult,
    FunctionDef,
    Query,
)
from .signature import SignatureFormatter

log = logging.getLogger(__name__)

# Constructors are not part of an instance's behavioural contract.
_CONSTRUCTORS = {"__init__", "__new__", "__init_subclass__", "__class_getitem__"}

_BUILTIN_NAMES = set(dir(builtins)) | {"None", "True", "False"}

# Emission order for decorators derived from griffe labels.
_DECORATOR_LABELS = ("property", "staticmethod", "classmethod")

_KIND_MAP = {
    griffe.ParameterKind.positional_only: ArgumentKind.POSITIONAL_ONLY,
    griffe.ParameterKind.positional_or_keyword: ArgumentKind.POSITIONAL_OR_KEYWORD,
    griffe.ParameterKind.var_positional: ArgumentKind.VAR_POSITIONAL,
    griffe.ParameterKind.keyword_only: ArgumentKind.KEYWORD_ONLY,
    griffe.ParameterKind.var_keyword: ArgumentKind.VAR_KEYWORD,
}

_LOOKUP_ERRORS = (KeyError, griffe.AliasResolutionError, griffe.CyclicAliasError)

_QUOTES = ("'", '"')


def _is_dunder(name: str) -> bool:
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


def _has_forward_refs(annotation: Union[str, griffe.Expr]) -> bool:
    if isinstance(annotation, str):
        return annotation.startswith(_QUOTES)
    elements = list(annotation.iterate(flat=True))
    # Strings inside Literal[...] are values, not names.
    if any(isinstance(e, griffe.ExprName) and e.name == "Literal" for e in elements):
        return False
    return any(isinstance(e, str) and e.startswith(_QUOTES) for e in elements)


class _AnnotationQualifier:
    """
    Rewrites annotation expressions to fully qualified dotted names and
    records the modules those names live in.
    """

    def __init__(self, collection: griffe.ModulesCollection):
        self._collection = collection
        self.dependencies: Set[str] = set()

    def qualify(
        self,
        annotation: Union[str, griffe.Expr, None],
        scope: Optional[Union[griffe.Module, griffe.Class]] = None,
    ) -> Optional[str]:
        if annotation is None:
            return None
        if scope is not None and _has_forward_refs(annotation):
            annotation = self._parse_forward_refs(str(annotation), scope)
        if isinstance(annotation, str):
            return annotation

        elements = list(annotation.iterate(flat=True))
        parts = []
        for i, element in enumerate(elements):
            if isinstance(element, griffe.ExprName):
                followed_by_attr = i + 1 < len(elements) and elements[i + 1] == "."
                parts.append(self._qualify_name(element, followed_by_attr))
            else:
                parts.append(str(element))
        return "".join(parts)

    def _parse_forward_refs(
        self, text: str, scope: Union[griffe.Module, griffe.Class]
    ) -> Union[str, griffe.Expr]:
        """
        Re-reads an annotation with its quoted names unquoted, resolving
        them in the scope the member was declared in.
        """
        try:
            node = ast.parse(text, mode="eval").body
        except SyntaxError:
            log.debug(f"Leaving unparsable annotation {text} as is")
            return text
        parsed = griffe.safe_get_expression(node, parent=scope, parse_strings=True)
        return text if parsed is None else parsed

    def _qualify_name(self, name: griffe.ExprName, followed_by_attr: bool) -> str:
        # Tail of an attribute chain, the head already carries the qualification.
        if isinstance(name.parent, griffe.ExprName):
            return name.name

        canonical = name.canonical_path
        if followed_by_attr:
            module = self._module_of(canonical, default=canonical)
        elif "." in canonical:
            module = self._module_of(canonical, default=canonical.rpartition(".")[0])
        else:
            if canonical not in _BUILTIN_NAMES:
                log.debug(f"Leaving unresolved annotation name '{canonical}' as is")
            return name.name

        if module == "builtins":
            return canonical.rpartition(".")[2]
        if module:
            self.dependencies.add(module)
        return canonical

    def _module_of(self, canonical: str, default: str) -> str:
        parts = canonical.split(".")
        for i in range(len(parts), 0, -1):
            candidate = ".".join(parts[:i])
            try:
                obj = self._collection[candidate]
            except _LOOKUP_ERRORS:
                continue
            if not obj.is_alias and obj.is_module:
                return candidate
        return default


class GriffeInterfaceExtractor:
    """
    Computes the method set of a class by static analysis with griffe.
    No module code is imported or executed.
    """

    def __init__(
        self,
        search_paths: Optional[Sequence[Union[str, Path]]] = None,
        formatter: Optional[SignatureFormatter] = None,
    ):
        self.search_paths = [Path(p) for p in (search_paths or [])]
        self.formatter = formatter or SignatureFormatter()

    def _make_loader(self) -> griffe.GriffeLoader:
        paths = [*self.search_paths, *(Path(p) for p in sys.path if p)]
        return griffe.GriffeLoader(search_paths=paths, allow_inspection=False)

    def _load_class(self, loader: griffe.GriffeLoader, query: Query) -> griffe.Class:
        try:
            module = loader.load(query.module_path)
        except ModuleNotFoundError as e:
            raise ExtractionError(
                f"cannot find module '{query.module_path}': {e}"
            ) from e
        except (ImportError, OSError, SyntaxError, griffe.GriffeError) as e:
            raise ExtractionError(
                f"cannot load module '{query.module_path}': {e}"
            ) from e

        loader.resolve_aliases(implicit=False, external=None)

        try:
            member = module.members[query.type_name]
        except KeyError as e:
            raise ExtractionError(f"type '{query.fqn}' not found") from e

        try:
            target = member.final_target if member.is_alias else member
        except (griffe.AliasResolutionError, griffe.CyclicAliasError) as e:
            raise ExtractionError(f"cannot resolve '{query.fqn}': {e}") from e

        if not target.is_class:
            raise ExtractionError(
                f"'{query.fqn}' is a {target.kind.value}, not a class"
            )
        return cast(griffe.Class, target)

    def extract(self, query: Query, include_private: bool) -> ExtractionResult:
        loader = self._make_loader()
        cls = self._load_class(loader, query)
        qualifier = _AnnotationQualifier(loader.modules_collection)

        try:
            members = cls.all_members
        except (ValueError, griffe.GriffeError) as e:
            raise ExtractionError(
                f"cannot compute method set of '{query.fqn}': {e}"
            ) from e

        methods: List[str] = []
        for name, member in sorted(members.items()):
            if name in _CONSTRUCTORS:
                continue
            if name.startswith("_") and not _is_dunder(name) and not include_private:
                continue

            try:
                target = member.final_target if member.is_alias else member
            except (griffe.AliasResolutionError, griffe.CyclicAliasError) as e:
                log.debug(f"Skipping unresolvable member {cls.path}.{name}: {e}")
                continue

            func_def = self._map_member(name, target, qualifier)
            if func_def is not None:
                methods.append(self.formatter.format(func_def))

        return ExtractionResult(
            methods=methods, dependencies=sorted(qualifier.dependencies)
        )

    def _map_member(
        self, name: str, obj: Any, qualifier: _AnnotationQualifier
    ) -> Optional[FunctionDef]:
        if obj.is_function:
            return self._map_function(name, cast(griffe.Function, obj), qualifier)
        if obj.is_attribute and "property" in obj.labels:
            return self._map_property(name, cast(griffe.Attribute, obj), qualifier)
        return None

    def _map_function(
        self, name: str, gf: griffe.Function, qualifier: _AnnotationQualifier
    ) -> FunctionDef:
        args = [self._map_argument(p, qualifier, gf.parent) for p in gf.parameters]
        return FunctionDef(
            name=name,
            args=args,
            return_annotation=qualifier.qualify(gf.returns, gf.parent),
            decorators=[label for label in _DECORATOR_LABELS if label in gf.labels],
            is_async="async" in gf.labels,
        )

    def _map_property(
        self, name: str, ga: griffe.Attribute, qualifier: _AnnotationQualifier
    ) -> FunctionDef:
        return FunctionDef(
            name=name,
            args=[Argument(name="self", kind=ArgumentKind.POSITIONAL_OR_KEYWORD)],
            return_annotation=qualifier.qualify(ga.annotation, ga.parent),
            decorators=["property"],
        )

    def _map_argument(
        self,
        param: griffe.Parameter,
        qualifier: _AnnotationQualifier,
        scope: Union[griffe.Module, griffe.Class],
    ) -> Argument:
        kind = _KIND_MAP.get(param.kind, ArgumentKind.POSITIONAL_OR_KEYWORD)
        return Argument(
            name=param.name,
            kind=kind,
            annotation=qualifier.qualify(param.annotation, scope),
            has_default=param.default is not None,
        )
