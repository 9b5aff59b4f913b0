from interfacer.spec import Query, QuerySyntaxError


def parse_query(text: str) -> Query:
    """
    Parses "<module.path>.<TypeName>" into a Query.

    The type name is everything after the last dot, so it can never
    contain a module separator itself.
    """
    module_path, sep, type_name = text.rpartition(".")
    if not sep:
        raise QuerySyntaxError(f"invalid query '{text}': missing '.' separator")
    if not module_path:
        raise QuerySyntaxError(f"invalid query '{text}': empty module path")
    if not type_name:
        raise QuerySyntaxError(f"invalid query '{text}': empty type name")
    if not type_name.isidentifier():
        raise QuerySyntaxError(
            f"invalid query '{text}': '{type_name}' is not an identifier"
        )
    for part in module_path.split("."):
        if not part.isidentifier():
            raise QuerySyntaxError(
                f"invalid query '{text}': bad module path component '{part}'"
            )
    return Query(module_path=module_path, type_name=type_name)


def build_query(module_path: str, type_name: str) -> Query:
    return parse_query(f"{module_path}.{type_name}")
