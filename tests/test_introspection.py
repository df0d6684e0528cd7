"""Tests for validator introspection."""
from pydantic import BaseModel

from openapi_validation.schema import validators_for_member
from openapi_validation.validation import (
    Length,
    ModelValidator,
    NotEmpty,
    NotNull,
    Predicate,
)
from samples.api.images import CreateImageRequest, CreateImageRequestValidator


class TestValidatorsForMember:
    """Test member-scoped validator lookup."""

    def test_collects_every_rule_for_property(self):
        validators = validators_for_member(CreateImageRequestValidator(), "File")
        assert [type(v) for v in validators] == [NotEmpty, Predicate]

    def test_match_is_case_insensitive(self):
        validator = CreateImageRequestValidator()
        for name in ("Name", "name", "NAME"):
            assert [type(v) for v in validators_for_member(validator, name)] == [Length]

    def test_unknown_property_and_missing_validator(self):
        assert validators_for_member(CreateImageRequestValidator(), "Missing") == []
        assert validators_for_member(None, "File") == []

    def test_included_rules_are_flattened(self):
        class Extra(ModelValidator[CreateImageRequest]):
            model = CreateImageRequest

            def __init__(self):
                super().__init__()
                self.rule_for("Name").not_null()
                self.include(CreateImageRequestValidator())

        validators = validators_for_member(Extra(), "Name")
        assert [type(v) for v in validators] == [NotNull, Length]

    def test_conditional_rules_can_be_excluded(self):
        class Conditional(ModelValidator[CreateImageRequest]):
            model = CreateImageRequest

            def __init__(self):
                super().__init__()
                self.rule_for("Name").not_empty().when(lambda r: r.File is not None)
                self.rule_for("Name").length(0, 10)

        validator = Conditional()
        assert len(validators_for_member(validator, "Name")) == 2
        only_unconditional = validators_for_member(validator, "Name", include_conditional=False)
        assert [type(v) for v in only_unconditional] == [Length]


class Paging(BaseModel):
    page_size: int = 20
    pagesize: int = 20
    sort_order: str = "asc"


class PagingValidator(ModelValidator[Paging]):
    model = Paging

    def __init__(self):
        super().__init__()
        self.rule_for("page_size").not_empty()
        self.rule_for("sort_order").not_null()


class TestConventionBridge:
    """Test snake_case/camelCase bridging between similarly named members."""

    def test_declared_member_is_not_bridged(self):
        validator = PagingValidator()
        assert validators_for_member(validator, "pagesize") == []
        assert [type(v) for v in validators_for_member(validator, "page_size")] == [NotEmpty]

    def test_schema_cased_name_reaches_snake_case_rule(self):
        assert [type(v) for v in validators_for_member(PagingValidator(), "sortOrder")] == [NotNull]
