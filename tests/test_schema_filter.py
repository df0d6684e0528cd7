"""Tests for the schema filter."""
from structlog.testing import capture_logs

from openapi_validation.core.config import Settings
from openapi_validation.filters import ValidationSchemaFilter
from openapi_validation.rules import Rule, configure
from openapi_validation.validation import ValidatorFactory
from samples.api.images import TagImageRequest, TagImageRequestValidator

from conftest import Account


class TestValidationSchemaFilter:
    """Test whole-object schema enrichment."""

    def test_body_model_is_enriched(self, factory, repository, generator):
        schema = generator.generate_schema(TagImageRequest, repository)
        results = ValidationSchemaFilter(factory).apply(schema, TagImageRequest)

        assert {r.property_key for r in results} == {"tags", "owner_email"}
        assert schema["required"] == ["tags"]
        assert schema["properties"]["tags"]["minItems"] == 1
        assert schema["properties"]["owner_email"]["format"] == "email"

    def test_schema_without_properties_is_skipped(self, factory):
        schema = {"type": "string"}
        assert ValidationSchemaFilter(factory).apply(schema, TagImageRequest) == []
        assert schema == {"type": "string"}

    def test_unvalidated_model_is_untouched(self, repository, generator):
        schema = generator.generate_schema(Account, repository)
        before = dict(schema)
        assert ValidationSchemaFilter(ValidatorFactory()).apply(schema, Account) == []
        assert schema == before

    def test_shared_registry(self, factory, repository, generator):
        registry = configure([Rule.noop("EMail")])
        schema_filter = ValidationSchemaFilter(factory, registry=registry)
        assert schema_filter.registry is registry

        schema = generator.generate_schema(TagImageRequest, repository)
        schema_filter.apply(schema, TagImageRequest)
        assert "format" not in schema["properties"]["owner_email"]

    def test_engine_failure_is_contained(self, repository, generator):
        class ExplodingFactory(ValidatorFactory):
            def get_validator(self, model_type):
                raise RuntimeError("factory unavailable")

        schema = generator.generate_schema(TagImageRequest, repository)
        with capture_logs() as logs:
            assert ValidationSchemaFilter(ExplodingFactory()).apply(schema, TagImageRequest) == []
        assert [e["event"] for e in logs] == ["schema_filter_failed"]

    def test_factory_is_kept_when_empty(self, repository, generator):
        factory = ValidatorFactory()
        schema_filter = ValidationSchemaFilter(factory)
        factory.register(TagImageRequestValidator())

        assert schema_filter.validator_factory is factory
        assert schema_filter.engine.validator_factory is factory
        schema = generator.generate_schema(TagImageRequest, repository)
        schema_filter.apply(schema, TagImageRequest)
        assert schema["required"] == ["tags"]

    def test_conditional_rules_setting(self, factory):
        schema_filter = ValidationSchemaFilter(factory, settings=Settings(APPLY_CONDITIONAL_RULES=False))
        assert schema_filter.engine.include_conditional is False
