"""Image API used as a sample of validator-enriched OpenAPI output.

Mirrors a reported case: an upload form whose ``File`` must not be empty and
must be a JPEG or PNG payload, and whose ``Name`` is limited to 250
characters. The image check is a predicate and has no schema
counterpart.
"""
from typing import Annotated

from fastapi import APIRouter, Form, Query
from pydantic import BaseModel, ConfigDict

from openapi_validation.schema import to_schema_case
from openapi_validation.validation import ModelValidator

router = APIRouter()

IMAGE_SIGNATURES = (b"\xff\xd8\xff", b"\x89PNG\r\n\x1a\n")


class ErrorCode:
    MUST_NOT_BE_EMPTY = "MustNotBeEmpty"
    EXPECTATION_NOT_MET = "ExpectationNotMet"
    INCORRECT_LENGTH = "IncorrectLength"


class CreateImageRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_schema_case, populate_by_name=True)

    File: bytes | None = None
    Name: str = ""


class SampleRequest(BaseModel):
    offset: int = 0
    count: int = 20
    search: str | None = None
    sort: str | None = None


class TagImageRequest(BaseModel):
    tags: list[str] = []
    owner_email: str | None = None


def _is_image_payload(request: CreateImageRequest, file: bytes | None) -> bool:
    return file is not None and file.startswith(IMAGE_SIGNATURES)


class CreateImageRequestValidator(ModelValidator[CreateImageRequest]):
    model = CreateImageRequest

    def __init__(self):
        super().__init__()
        self.rule_for("File").not_empty().with_error_code(ErrorCode.MUST_NOT_BE_EMPTY)
        self.rule_for("File").must(_is_image_payload, pass_instance=True) \
            .with_message("Invalid content type").with_error_code(ErrorCode.EXPECTATION_NOT_MET)
        self.rule_for("Name").length(0, 250).with_error_code(ErrorCode.INCORRECT_LENGTH)


class SampleRequestValidator(ModelValidator[SampleRequest]):
    model = SampleRequest

    def __init__(self):
        super().__init__()
        self.rule_for("offset").greater_than_or_equal(0)
        self.rule_for("count").inclusive_between(1, 100)
        self.rule_for("search").not_empty().max_length(100)
        self.rule_for("sort").one_of("name", "created")


class TagImageRequestValidator(ModelValidator[TagImageRequest]):
    model = TagImageRequest

    def __init__(self):
        super().__init__()
        self.rule_for("tags").not_empty()
        self.rule_for("owner_email").email()


VALIDATORS = (CreateImageRequestValidator(), SampleRequestValidator(), TagImageRequestValidator())


@router.post("/create-profile-image")
async def create_profile_image(request: Annotated[CreateImageRequest, Form()]):
    return {"name": request.Name}


@router.put("/paging")
async def put(request: Annotated[SampleRequest, Query()]):
    return {"offset": request.offset, "count": request.count}


@router.post("/{image_id}/tags")
async def tag_image(image_id: int, request: TagImageRequest):
    return {"image_id": image_id, "tags": request.tags}
