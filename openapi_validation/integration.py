"""FastAPI integration.

Hooks the filters into FastAPI's OpenAPI generation:

    app = FastAPI()
    install(app, ValidatorFactory([CreateImageRequestValidator()]))

Every call to ``app.openapi()`` then builds the document with
``get_openapi``, applies the schema filter to validated component schemas and
the operation filter to every operation. Each build uses its own
``SchemaRepository``; only the rule registry is shared.
"""
from __future__ import annotations

from typing import Any, Iterable, Iterator

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from fastapi import routing
from fastapi.routing import APIRoute
from pydantic import BaseModel

from openapi_validation.core.config import Settings
from openapi_validation.core.errors import ErrorCode, try_result
from openapi_validation.core.logging import filter_logger
from openapi_validation.filters import (
    ApiDescription,
    ApiParameterDescription,
    ModelMetadata,
    OperationFilterContext,
    ValidationOperationFilter,
    ValidationSchemaFilter,
)
from openapi_validation.rules import Rule, configure
from openapi_validation.schema import PydanticSchemaGenerator, SchemaRepository, find_name
from openapi_validation.validation import ValidatorFactory

log = filter_logger()


def _is_model(annotation: Any) -> bool:
    return isinstance(annotation, type) and issubclass(annotation, BaseModel)


def _model_field_name(model: type[BaseModel], parameter_name: str) -> str:
    names = {name: name for name in model.model_fields}
    for name, info in model.model_fields.items():
        if info.alias:
            names.setdefault(info.alias, name)
    match = find_name(names, parameter_name)
    return names[match] if match is not None else parameter_name


def _describe_field(field: Any, container: type | None) -> Iterator[ApiParameterDescription]:
    annotation = field.field_info.annotation
    if _is_model(annotation):
        # Parameter models (Annotated[Model, Query()]) are published one parameter per field
        for name, info in annotation.model_fields.items():
            yield ApiParameterDescription(info.alias or name, ModelMetadata(annotation, name))
    elif container is not None:
        yield ApiParameterDescription(field.alias, ModelMetadata(container, _model_field_name(container, field.name)))
    else:
        yield ApiParameterDescription(field.alias)


def _describe_dependant(dependant: Any, container: type | None) -> Iterator[ApiParameterDescription]:
    for field in (
        *dependant.path_params,
        *dependant.query_params,
        *dependant.header_params,
        *dependant.cookie_params,
    ):
        yield from _describe_field(field, container)
    for sub_dependant in dependant.dependencies:
        call = sub_dependant.call
        yield from _describe_dependant(sub_dependant, call if _is_model(call) else None)


def describe_route(route: APIRoute | routing.RouteContext) -> ApiDescription:
    """Parameter descriptions of ``route`` with the model property each one binds."""
    return ApiDescription(tuple(_describe_dependant(route.dependant, None)))


def build_openapi(
    app: FastAPI,
    validator_factory: ValidatorFactory,
    rules: Iterable[Rule] | None = None,
    *,
    settings: Settings | None = None,
) -> dict[str, Any]:
    """Generate the OpenAPI document of ``app`` with validator rules applied."""
    document = get_openapi(
        title=app.title,
        version=app.version,
        openapi_version=app.openapi_version,
        summary=app.summary,
        description=app.description,
        terms_of_service=app.terms_of_service,
        contact=app.contact,
        license_info=app.license_info,
        routes=app.routes,
        webhooks=app.webhooks.routes,
        tags=app.openapi_tags,
        servers=app.servers,
        separate_input_output_schemas=app.separate_input_output_schemas,
        external_docs=app.openapi_external_docs,
    )
    components = document.setdefault("components", {})
    repository = SchemaRepository(components.setdefault("schemas", {}))
    generator = PydanticSchemaGenerator()
    rules = list(rules or ())

    schema_filter = ValidationSchemaFilter(validator_factory, registry=configure(rules), settings=settings)
    for model_type in validator_factory.models:
        if (node := repository.get(model_type)) is not None:
            schema_filter.apply(node, model_type)

    operation_filter = ValidationOperationFilter(validator_factory, rules, settings=settings)
    paths = document.get("paths") or {}
    # Included routers are flattened into route contexts carrying the prefixed path
    for route in routing.iter_route_contexts(app.routes):
        if not isinstance(route.original_route, APIRoute) or not route.include_in_schema:
            continue
        if not (path_item := paths.get(route.path_format)):
            continue
        described = try_result(lambda: describe_route(route), code=ErrorCode.E3000_OPERATION_GENERIC, origin="integration")
        if described.is_err():
            log.warning("route_description_failed", path=route.path_format, error=described.unwrap_err().message)
            continue
        for method in sorted(route.methods):
            if (operation := path_item.get(method.lower())) is None:
                continue
            context = OperationFilterContext(
                described.unwrap(), repository, generator, method=method, path=route.path_format,
            )
            operation_filter.apply(operation, context)

    if not components["schemas"]:
        del components["schemas"]
    if not components:
        del document["components"]
    log.debug("openapi_built", paths=len(paths), schemas=len(repository), generated=sorted(repository.generated))
    return document


def install(
    app: FastAPI,
    validator_factory: ValidatorFactory,
    rules: Iterable[Rule] | None = None,
    *,
    settings: Settings | None = None,
) -> None:
    """Replace ``app.openapi`` with a cached, rule-enriched generator."""
    rules = list(rules or ())

    def openapi() -> dict[str, Any]:
        if app.openapi_schema is None:
            app.openapi_schema = build_openapi(app, validator_factory, rules, settings=settings)
        return app.openapi_schema

    app.openapi = openapi  # type: ignore[method-assign]
