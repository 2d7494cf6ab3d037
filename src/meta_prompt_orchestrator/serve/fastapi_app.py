"""FastAPI surface over one process-local orchestrator session.

Endpoints:
- GET  /health
- GET  /state
- PUT  /template              { "text": "..." }
- PUT  /variables/{name}      { "value": "..." }
- POST /packs                 add a pack and select it
- POST /packs/{id}/select
- PATCH /packs/{id}           { "field": "goal", "value": "..." }
- POST /packs/sync            copy the active identifier into pack_name
- GET  /combined              text/plain
- GET  /export                JSON snapshot
- POST /copy/{target}         target: meta | dispatch | json
"""
from __future__ import annotations
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, HTTPException, Response
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel
import yaml

from meta_prompt_orchestrator.common.config import SEED_PATH, TEMPLATE_PATH
from meta_prompt_orchestrator.common.logging_setup import setup_logging
from meta_prompt_orchestrator.common.schema import PackField, PackRecord
from meta_prompt_orchestrator.session.registry import PackNotFoundError
from meta_prompt_orchestrator.session.state import COPY_TARGETS, Session

LOGGER = logging.getLogger("orchestrator.app")
setup_logging()

class TemplateIn(BaseModel):
    text: str

class VariableIn(BaseModel):
    value: str

class PackFieldIn(BaseModel):
    field: PackField
    value: str

class PackOut(BaseModel):
    id: str
    name: str
    pack_name: str
    goal: str
    per_image: str
    system_notes: str

class FormField(BaseModel):
    name: str
    value: str

class StateOut(BaseModel):
    version: int
    template: str
    placeholders: list[str]
    form_fields: list[FormField]
    unresolved: list[str]
    variables: dict[str, str]
    packs: list[PackOut]
    active_pack_id: str | None
    rendered: str
    combined: str
    copied: str | None = None

class CopyOut(BaseModel):
    label: str
    copied: bool
    error: str | None = None

def get_session() -> Session:
    session = getattr(app.state, "session", None)
    if session is None:
        try:
            session = Session.from_files(TEMPLATE_PATH, SEED_PATH)
        except (OSError, ValueError, yaml.YAMLError) as e:
            LOGGER.error("Seed session unavailable: %s", e)
            raise HTTPException(status_code=503, detail="Seed session unavailable")
        app.state.session = session
    return session

@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    """Load the seed session and warn if the template has nothing to fill."""
    try:
        session = get_session()
        if not session.placeholders:
            LOGGER.warning("Meta prompt template has no {{placeholders}}")
    except Exception as e:
        LOGGER.warning("Failed to load seed session: %s", e)
    yield

app = FastAPI(lifespan=lifespan)

def _pack_out(pack: PackRecord) -> PackOut:
    return PackOut(
        id=pack.id,
        name=pack.name,
        pack_name=pack.pack_name,
        goal=pack.goal,
        per_image=pack.per_image,
        system_notes=pack.system_notes,
    )

def _not_found(e: PackNotFoundError) -> HTTPException:
    LOGGER.warning("Pack lookup failed: %s", e.pack_id)
    return HTTPException(status_code=404, detail=f"Unknown pack id: {e.pack_id}")

@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}

@app.get("/state", response_model=StateOut)
def state() -> StateOut:
    session = get_session()
    return StateOut(
        version=session.version,
        template=session.template,
        placeholders=session.placeholders,
        form_fields=[FormField(name=n, value=v) for n, v in session.form_fields()],
        unresolved=session.unresolved(),
        variables=session.variables.as_dict(),
        packs=[_pack_out(p) for p in session.registry],
        active_pack_id=session.registry.active_id,
        rendered=session.rendered(),
        combined=session.combined(),
        copied=session.copy_status.label,
    )

@app.put("/template", response_model=StateOut)
def put_template(body: TemplateIn) -> StateOut:
    get_session().set_template(body.text)
    return state()

@app.put("/variables/{name}", response_model=StateOut)
def put_variable(name: str, body: VariableIn) -> StateOut:
    get_session().set_variable(name, body.value)
    return state()

@app.post("/packs", response_model=PackOut)
def add_pack() -> PackOut:
    return _pack_out(get_session().add_pack())

@app.post("/packs/sync", response_model=StateOut)
def sync_pack_name() -> StateOut:
    get_session().sync_pack_name()
    return state()

@app.post("/packs/{pack_id}/select", response_model=PackOut)
def select_pack(pack_id: str) -> PackOut:
    try:
        return _pack_out(get_session().select_pack(pack_id))
    except PackNotFoundError as e:
        raise _not_found(e)

@app.patch("/packs/{pack_id}", response_model=PackOut)
def update_pack(pack_id: str, body: PackFieldIn) -> PackOut:
    try:
        return _pack_out(get_session().update_pack_field(pack_id, body.field, body.value))
    except PackNotFoundError as e:
        raise _not_found(e)

@app.get("/combined", response_class=PlainTextResponse)
def combined() -> str:
    return get_session().combined()

@app.get("/export")
def export() -> Response:
    return Response(content=get_session().snapshot_json(), media_type="application/json")

@app.post("/copy/{target}", response_model=CopyOut)
def copy(target: str) -> CopyOut:
    if target not in COPY_TARGETS:
        raise HTTPException(status_code=404, detail=f"Unknown copy target: {target}")
    result = get_session().copy(target)
    return CopyOut(label=result.label, copied=result.copied, error=result.error)
