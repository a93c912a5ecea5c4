"""Path assembler — builds path items and operations from a route registry."""

import logging
from http import HTTPStatus

from api_spec_builder.builder.document import Document, Info, Operation, PathItem, Response, Responses
from api_spec_builder.builder.parameters import build_parameter
from api_spec_builder.builder.responses import build_response
from api_spec_builder.builder.schema import extract_vendor_extensions, strip_tags
from api_spec_builder.config import Config
from api_spec_builder.routes.base import RouteDescriptor, RouteRegistry

logger = logging.getLogger(__name__)

# Route metadata key holding the operation's list of tag names
KEY_OPENAPI_TAGS = "openapi.tags"

SWAGGER_VERSION = "2.0"


def sanitize_path(route_path: str) -> tuple[str, dict[str, str]]:
    """Remove inline patterns from named path parameters.

    ``/api/v1/{name:[a-z]+}/`` becomes ``/api/v1/{name}``. Also returns the
    mapping from parameter name to its extracted pattern. Only the first
    ":" separates name and pattern, so patterns may contain colons.
    """
    path = ""
    patterns: dict[str, str] = {}
    for fragment in route_path.split("/"):
        if not fragment:
            continue
        if fragment.startswith("{") and ":" in fragment:
            name, _, pattern = fragment[1:].partition(":")
            patterns[name] = pattern.removesuffix("}")
            fragment = "{" + name + "}"
        path += "/" + fragment
    return path or "/", patterns


def build_paths(registry: RouteRegistry, config: Config) -> dict[str, PathItem]:
    paths: dict[str, PathItem] = {}
    for route in registry.routes:
        path, patterns = sanitize_path(route.path)
        path_item = paths.setdefault(path, PathItem())
        path_item.set_operation(route.method, build_operation(registry, route, patterns, config))
    return paths


def build_operation(
    registry: RouteRegistry,
    route: RouteDescriptor,
    patterns: dict[str, str],
    config: Config,
) -> Operation:
    o = Operation(
        operation_id=route.operation,
        description=route.notes,
        summary=strip_tags(route.doc),
        deprecated=route.deprecated,
        tags=_tags(route),
        responses=Responses(),
    )
    extract_vendor_extensions(o, route.extensions)

    # Path parameters shared by the whole registry come first, then the route's own
    for param in [*registry.path_parameters, *route.parameters]:
        o.parameters.append(build_parameter(route, param, patterns.get(param.name, ""), config))

    for code, error in route.response_errors.items():
        o.responses.status_codes[code] = build_response(error, config)
    if route.default_response is not None:
        o.responses.default = build_response(route.default_response, config)
    if not o.responses.status_codes:
        o.responses.status_codes[HTTPStatus.OK.value] = Response(description=HTTPStatus.OK.phrase)
    return o


def build_document(registries: list[RouteRegistry], config: Config) -> Document:
    """Merge the paths of every registry into one document.

    Registries are processed in order; a later route with the same path and
    method replaces the earlier operation.
    """
    document = Document(
        swagger=SWAGGER_VERSION,
        info=Info(title=config.title, version=config.version),
    )
    for registry in registries:
        for path, path_item in build_paths(registry, config).items():
            if path in document.paths:
                document.paths[path].merge(path_item)
            else:
                document.paths[path] = path_item
    if config.post_build_handler is not None:
        config.post_build_handler(document)
    return document


def _tags(route: RouteDescriptor) -> list[str]:
    tags = route.metadata.get(KEY_OPENAPI_TAGS)
    if tags is None:
        return []
    if isinstance(tags, (list, tuple)) and all(isinstance(t, str) for t in tags):
        return list(tags)
    logger.debug("Ignoring %s metadata of type %s on %s %s", KEY_OPENAPI_TAGS, type(tags).__name__, route.method, route.path)
    return []
