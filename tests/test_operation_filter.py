"""Tests for the operation filter."""
import copy

import pytest
from structlog.testing import capture_logs

from openapi_validation.core.config import Settings
from openapi_validation.core.errors import ErrorCode, FeatureNotSupported
from openapi_validation.filters import (
    ApiDescription,
    ApiParameterDescription,
    ModelMetadata,
    OperationFilterContext,
    ValidationOperationFilter,
)
from openapi_validation.rules import Rule
from openapi_validation.validation import NotEmpty, ValidatorFactory
from samples.api.images import CreateImageRequest, CreateImageRequestValidator, SampleRequest


def form_operation(operation_id="CreateProfileImage"):
    return {
        "operationId": operation_id,
        "parameters": [
            {"name": "File", "in": "query", "required": False, "schema": {"type": "string"}},
            {"name": "Name", "in": "query", "required": False, "schema": {"type": "string"}},
        ],
    }


def form_context(repository, generator, **parameters):
    descriptions = parameters or {
        "File": ModelMetadata(CreateImageRequest, "File"),
        "Name": ModelMetadata(CreateImageRequest, "Name"),
    }
    return OperationFilterContext(
        ApiDescription(tuple(ApiParameterDescription(name, meta) for name, meta in descriptions.items())),
        repository,
        generator,
        method="POST",
        path="/api/image/create-profile-image",
    )


def explode(ctx):
    raise RuntimeError("boom")


class TestRequiredWriteBack:
    """Test that parameters publish the schema's required-ness."""

    def test_not_empty_marks_parameter_required(self, factory, repository, generator):
        operation = form_operation()
        ValidationOperationFilter(factory).apply(operation, form_context(repository, generator))

        file_param, name_param = operation["parameters"]
        assert file_param["required"] is True
        assert name_param["required"] is False
        schema = repository.get(CreateImageRequest)
        assert schema["required"] == ["file"]
        assert schema["properties"]["name"]["maxLength"] == 250

    def test_required_cleared_when_schema_does_not_require(self, factory, repository, generator):
        operation = form_operation()
        operation["parameters"][1]["required"] = True
        ValidationOperationFilter(factory).apply(operation, form_context(repository, generator))
        assert operation["parameters"][1]["required"] is False

    def test_path_parameter_stays_required(self, factory, repository, generator):
        operation = {"parameters": [{"name": "Name", "in": "path", "required": True, "schema": {"type": "string"}}]}
        context = form_context(repository, generator, Name=ModelMetadata(CreateImageRequest, "Name"))
        ValidationOperationFilter(factory).apply(operation, context)
        assert operation["parameters"][0]["required"] is True

    def test_parameter_name_lookup_is_case_insensitive(self, factory, repository, generator):
        operation = {"parameters": [{"name": "file", "in": "query", "required": False}]}
        context = form_context(repository, generator, File=ModelMetadata(CreateImageRequest, "File"))
        ValidationOperationFilter(factory).apply(operation, context)
        assert operation["parameters"][0]["required"] is True


class TestSkippedParameters:
    """Test parameters the filter leaves untouched."""

    def test_operation_without_parameters(self, factory, repository, generator):
        operation = {"operationId": "Health"}
        ValidationOperationFilter(factory).apply(operation, form_context(repository, generator))
        assert operation == {"operationId": "Health"}
        assert len(repository) == 0

    def test_scalar_parameter_without_metadata(self, factory, repository, generator):
        operation = {"parameters": [{"name": "id", "in": "query", "required": False}]}
        context = OperationFilterContext(
            ApiDescription((ApiParameterDescription("id"),)), repository, generator,
        )
        ValidationOperationFilter(factory).apply(operation, context)
        assert operation["parameters"][0]["required"] is False
        assert len(repository) == 0

    def test_undescribed_parameter(self, factory, repository, generator):
        operation = {"parameters": [{"name": "other", "in": "query", "required": False}]}
        ValidationOperationFilter(factory).apply(operation, form_context(repository, generator))
        assert operation["parameters"][0]["required"] is False

    def test_container_without_validator(self, repository, generator):
        operation = form_operation()
        before = copy.deepcopy(operation)
        ValidationOperationFilter(ValidatorFactory()).apply(operation, form_context(repository, generator))
        assert operation == before
        assert len(repository) == 0

    def test_property_without_rules(self, factory, repository, generator):
        operation = {"parameters": [{"name": "Other", "in": "query", "required": True}]}
        context = form_context(repository, generator, Other=ModelMetadata(CreateImageRequest, "Other"))
        ValidationOperationFilter(factory).apply(operation, context)
        assert operation["parameters"][0]["required"] is True


class TestCustomRules:
    """Test rule overrides at filter construction."""

    def test_replacing_not_empty_keeps_required(self, factory, repository, generator):
        rules = [Rule("NotEmpty", lambda v: isinstance(v, NotEmpty), lambda ctx: None)]
        operation = form_operation()
        ValidationOperationFilter(factory, rules).apply(operation, form_context(repository, generator))

        assert operation["parameters"][0]["required"] is True
        assert "minLength" not in repository.get(CreateImageRequest)["properties"]["file"]

    def test_noop_required_leaves_parameter_optional(self, factory, repository, generator):
        operation = form_operation()
        ValidationOperationFilter(factory, [Rule.noop("Required")]).apply(
            operation, form_context(repository, generator),
        )
        assert operation["parameters"][0]["required"] is False
        assert "required" not in repository.get(CreateImageRequest)

    def test_failing_rule_does_not_abort_operation(self, factory, repository, generator):
        rules = [Rule("Broken", lambda v: True, explode)]
        operation = form_operation()
        with capture_logs() as logs:
            ValidationOperationFilter(factory, rules).apply(operation, form_context(repository, generator))

        assert operation["parameters"][0]["required"] is True
        assert repository.get(CreateImageRequest)["properties"]["name"]["maxLength"] == 250
        assert [e["event"] for e in logs].count("rule_apply_failed") == 3
        assert "operation_filter_failed" not in [e["event"] for e in logs]


class TestFailureHandling:
    """Test that operation-level failures are contained."""

    def test_generation_failure_restores_parameters(self, factory, repository):
        class FailingGenerator:
            def generate_schema(self, model_type, repository):
                raise RuntimeError("cannot generate")

        operation = form_operation("Broken")
        before = copy.deepcopy(operation)
        context = form_context(repository, FailingGenerator())

        with capture_logs() as logs:
            ValidationOperationFilter(factory).apply(operation, context)

        assert operation == before
        failures = [e for e in logs if e["event"] == "operation_filter_failed"]
        assert len(failures) == 1
        assert failures[0]["operation_id"] == "Broken"
        assert failures[0]["code"] == ErrorCode.E3001_OPERATION_FILTER_FAILED.name
        assert failures[0]["category"] == "operation"
        assert failures[0]["error"] == "Error on apply rules for operation 'Broken'"
        assert failures[0]["log_level"] == "warning"

    def test_partial_write_back_is_rolled_back(self, factory, repository, generator):
        class FlakyRepository(type(repository)):
            calls = 0

            def get_or_generate(self, model_type, generator):
                type(self).calls += 1
                if type(self).calls > 1:
                    raise RuntimeError("second lookup failed")
                return super().get_or_generate(model_type, generator)

        operation = form_operation()
        before = copy.deepcopy(operation)
        with capture_logs():
            ValidationOperationFilter(factory).apply(operation, form_context(FlakyRepository(), generator))
        assert operation == before

    def test_later_operation_still_processed(self, factory, repository, generator):
        class FailingGenerator:
            def generate_schema(self, model_type, repository):
                raise RuntimeError("cannot generate")

        operation_filter = ValidationOperationFilter(factory)
        with capture_logs():
            operation_filter.apply(form_operation("First"), form_context(repository, FailingGenerator()))

        second = form_operation("Second")
        operation_filter.apply(second, form_context(repository, generator))
        assert second["parameters"][0]["required"] is True


class TestConstruction:
    """Test filter construction options."""

    def test_parameter_constraint_propagation_not_supported(self, factory):
        with pytest.raises(FeatureNotSupported) as exc_info:
            ValidationOperationFilter(factory, propagate_parameter_constraints=True)
        assert exc_info.value.error.code == ErrorCode.E9002_NOT_IMPLEMENTED

    def test_parameter_constraint_propagation_from_settings(self, factory):
        with pytest.raises(FeatureNotSupported):
            ValidationOperationFilter(factory, settings=Settings(PROPAGATE_PARAMETER_CONSTRAINTS=True))

    def test_conditional_rules_setting_reaches_engine(self, factory):
        operation_filter = ValidationOperationFilter(factory, settings=Settings(APPLY_CONDITIONAL_RULES=False))
        assert operation_filter.engine.include_conditional is False

    def test_factory_is_kept_when_empty(self, repository, generator):
        factory = ValidatorFactory()
        operation_filter = ValidationOperationFilter(factory)
        factory.register(CreateImageRequestValidator())

        assert operation_filter.validator_factory is factory
        operation = form_operation()
        operation_filter.apply(operation, form_context(repository, generator))
        assert operation["parameters"][0]["required"] is True

    def test_defaults(self, repository, generator):
        operation_filter = ValidationOperationFilter()
        assert len(operation_filter.validator_factory) == 0
        assert list(operation_filter.registry)[0] == "Required"
        operation = {"parameters": [{"name": "offset", "in": "query", "required": False}]}
        context = form_context(repository, generator, offset=ModelMetadata(SampleRequest, "offset"))
        operation_filter.apply(operation, context)
        assert operation["parameters"][0]["required"] is False
