from interfacer.spec import ExtractionResult, Query, RenderModel


def split_as_value(as_value: str) -> tuple[str, str]:
    """
    Splits "-as" into (package name, interface name) on the first dot.
    Without a dot the package name is left empty.
    """
    package_name, sep, interface_name = as_value.partition(".")
    if not sep:
        return "", as_value
    return package_name, interface_name


def build_render_model(
    query: Query, extraction: ExtractionResult, as_value: str
) -> RenderModel:
    package_name, interface_name = split_as_value(as_value)
    return RenderModel(
        package_name=package_name,
        interface_name=interface_name,
        source_type=f'"{query.fqn}"',
        dependencies=list(extraction.dependencies),
        methods=list(extraction.methods),
    )
