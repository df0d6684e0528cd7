import pytest
from pydantic import BaseModel, ConfigDict

from openapi_validation.schema import PydanticSchemaGenerator, SchemaRepository, to_schema_case
from openapi_validation.validation import ModelValidator, ValidatorFactory
from samples.api.images import (
    CreateImageRequest,
    CreateImageRequestValidator,
    SampleRequest,
    SampleRequestValidator,
    TagImageRequestValidator,
)


class Account(BaseModel):
    model_config = ConfigDict(alias_generator=to_schema_case, populate_by_name=True)

    user_name: str = ""
    email: str | None = None
    age: int = 0
    score: float = 0.0
    role: str = "member"
    nickname: str | None = None
    aliases: list[str] = []


class AccountValidator(ModelValidator[Account]):
    model = Account

    def __init__(self):
        super().__init__()
        self.rule_for("user_name").not_empty().length(3, 30).matches(r"^[a-z0-9_]+$")
        self.rule_for("email").not_null().email()
        self.rule_for("age").greater_than_or_equal(18).less_than(130)
        self.rule_for("score").exclusive_between(0, 10)
        self.rule_for("role").one_of("member", "admin")
        self.rule_for("aliases").length(1, 5)


@pytest.fixture
def factory() -> ValidatorFactory:
    return ValidatorFactory([
        CreateImageRequestValidator(),
        SampleRequestValidator(),
        TagImageRequestValidator(),
        AccountValidator(),
    ])


@pytest.fixture
def repository() -> SchemaRepository:
    return SchemaRepository()


@pytest.fixture
def generator() -> PydanticSchemaGenerator:
    return PydanticSchemaGenerator()


@pytest.fixture
def image_request_model() -> type[CreateImageRequest]:
    return CreateImageRequest


@pytest.fixture
def paging_model() -> type[SampleRequest]:
    return SampleRequest
