# API routes

from typing import Any, Dict, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel

from validation_builder.patterns.client import PatternRegistryClient
from validation_builder.schema.errors import SchemaBuilderError
from validation_builder.session import BuilderSession, get_session

router = APIRouter()


class RawJsonRequest(BaseModel):
    raw_json: str


class TypeNameRequest(BaseModel):
    type_name: str


class PatternRequest(BaseModel):
    key: str
    value: str
    override: bool = False


class ObjectTypeRequest(BaseModel):
    name: str


class ObjectTypeFieldRequest(BaseModel):
    path: str


class FieldPatch(BaseModel):
    """Only attributes present in the request body are applied."""
    required: Optional[bool] = None
    pattern_key: Optional[str] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    object_type: Optional[str] = None


def _bad_request(e: SchemaBuilderError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"error_type": type(e).__name__, "message": str(e)},
    )


def _patch_values(patch: FieldPatch) -> Dict[str, Any]:
    values = patch.model_dump(exclude_unset=True)
    # null clears optional attributes but not these two
    for name in ("required", "pattern_key"):
        if name in values and values[name] is None:
            del values[name]
    return values


@router.get("/session")
def read_session(session: BuilderSession = Depends(get_session)):
    """Current root fields, object types, patterns and type name."""
    return session.to_dict()


@router.put("/session/type-name")
def set_type_name(request: TypeNameRequest, session: BuilderSession = Depends(get_session)):
    try:
        session.set_type_name(request.type_name)
    except SchemaBuilderError as e:
        raise _bad_request(e)
    return session.to_dict()


@router.post("/analyze")
def analyze(request: RawJsonRequest, session: BuilderSession = Depends(get_session)):
    """
    Infer root fields and object types from a sample document.

    - **raw_json**: Sample JSON text

    Replaces root fields and object types; patterns are kept.
    """
    try:
        session.analyze(request.raw_json)
    except SchemaBuilderError as e:
        raise _bad_request(e)
    return session.to_dict()


@router.post("/load")
def load(request: RawJsonRequest, session: BuilderSession = Depends(get_session)):
    """
    Load an existing Validation JSON document into the session.

    - **raw_json**: Validation JSON text

    The session is left unchanged if the document is rejected.
    """
    try:
        session.load(request.raw_json)
    except SchemaBuilderError as e:
        raise _bad_request(e)
    return session.to_dict()


@router.post("/generate")
def generate(session: BuilderSession = Depends(get_session)):
    """Serialize the session into a Validation JSON document."""
    return session.generate()


@router.get("/patterns")
def list_patterns(session: BuilderSession = Depends(get_session)):
    return {"patterns": session.patterns, "notice": session.notice}


@router.post("/patterns", status_code=status.HTTP_201_CREATED)
def create_pattern(request: PatternRequest, session: BuilderSession = Depends(get_session)):
    try:
        session.add_pattern(request.key, request.value, override=request.override)
    except SchemaBuilderError as e:
        raise _bad_request(e)
    return {"patterns": session.patterns}


@router.post("/patterns/refresh")
def refresh_patterns(session: BuilderSession = Depends(get_session)):
    """Replace the pattern map with a fresh copy from the registry."""
    session.apply_registry_patterns(PatternRegistryClient().fetch())
    return {"patterns": session.patterns, "notice": session.notice}


@router.post("/object-types", status_code=status.HTTP_201_CREATED)
def create_object_type(request: ObjectTypeRequest, session: BuilderSession = Depends(get_session)):
    try:
        session.add_object_type(request.name)
    except SchemaBuilderError as e:
        raise _bad_request(e)
    return session.to_dict()


@router.post("/object-types/{name}/fields", status_code=status.HTTP_201_CREATED)
def create_object_type_field(
    name: str,
    request: ObjectTypeFieldRequest,
    session: BuilderSession = Depends(get_session)
):
    try:
        cfg = session.add_object_type_field(name, request.path)
    except SchemaBuilderError as e:
        raise _bad_request(e)
    return cfg.to_dict()


@router.patch("/object-types/{name}/fields")
def update_object_type_field(
    name: str,
    patch: FieldPatch,
    path: str = Query(..., description="Field path, e.g. history[*].action"),
    session: BuilderSession = Depends(get_session)
):
    try:
        cfg = session.update_object_type_field(name, path, **_patch_values(patch))
    except SchemaBuilderError as e:
        raise _bad_request(e)
    return cfg.to_dict()


@router.patch("/root-fields")
def update_root_field(
    patch: FieldPatch,
    path: str = Query(..., description="Field path, e.g. permissions[*]"),
    session: BuilderSession = Depends(get_session)
):
    """
    Edit one root field.

    - **path**: Field path to edit
    - body: attributes to change; ``null`` clears min/max length or object type
    """
    try:
        cfg = session.update_root_field(path, **_patch_values(patch))
    except SchemaBuilderError as e:
        raise _bad_request(e)
    return cfg.to_dict()
