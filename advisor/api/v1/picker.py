from fastapi import APIRouter, Depends, HTTPException

from advisor.api.v1.schemas import (
    CatalogResponseSchema,
    CategoriesResponseSchema,
    ChatRequestSchema,
    DisplayRequestSchema,
    SelectionResponseSchema,
    SelectionUpdateResponseSchema,
    TooltipRequestSchema,
    TooltipResponseSchema,
    TranscriptEntrySchema,
    TranscriptResponseSchema,
)
from advisor.application.exceptions import CatalogUnavailableError, SubmissionInProgressError
from advisor.application.use_cases.advisor_session import AdvisorSession
from advisor.wiring.dependencies import get_session

router = APIRouter()


def _transcript(session: AdvisorSession) -> TranscriptResponseSchema:
    return TranscriptResponseSchema(
        entries=[TranscriptEntrySchema.from_entry(e) for e in session.transcript.entries],
        submit_enabled=session.submit_enabled,
    )


@router.get("/categories", response_model=CategoriesResponseSchema)
async def categories(session: AdvisorSession = Depends(get_session)):
    try:
        return CategoriesResponseSchema(categories=await session.categories())
    except CatalogUnavailableError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.get("/catalog", response_model=CatalogResponseSchema)
async def catalog(session: AdvisorSession = Depends(get_session)):
    return CatalogResponseSchema.from_view(session.catalog_view)


@router.post("/catalog/display", response_model=CatalogResponseSchema)
async def display_category(req: DisplayRequestSchema, session: AdvisorSession = Depends(get_session)):
    try:
        view = await session.change_category(req.category)
    except CatalogUnavailableError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return CatalogResponseSchema.from_view(view)


@router.get("/selection", response_model=SelectionResponseSchema)
async def selection(session: AdvisorSession = Depends(get_session)):
    return SelectionResponseSchema.from_view(session.selection_view)


@router.post("/selection/{product_id}/toggle", response_model=SelectionUpdateResponseSchema)
async def toggle_selection(product_id: int, session: AdvisorSession = Depends(get_session)):
    return SelectionUpdateResponseSchema.from_update(session.toggle(product_id))


@router.delete("/selection/{product_id}", response_model=SelectionUpdateResponseSchema)
async def remove_selection(product_id: int, session: AdvisorSession = Depends(get_session)):
    return SelectionUpdateResponseSchema.from_update(session.remove(product_id))


@router.post("/tooltip/enter", response_model=TooltipResponseSchema)
async def tooltip_enter(req: TooltipRequestSchema, session: AdvisorSession = Depends(get_session)):
    card, size, viewport = req.geometry()
    return TooltipResponseSchema.from_view(session.hover(req.product_id, card, size, viewport))


@router.post("/tooltip/leave", response_model=TooltipResponseSchema)
async def tooltip_leave(session: AdvisorSession = Depends(get_session)):
    return TooltipResponseSchema.from_view(await session.unhover())


@router.get("/transcript", response_model=TranscriptResponseSchema)
async def transcript(session: AdvisorSession = Depends(get_session)):
    return _transcript(session)


@router.post("/chat", response_model=TranscriptResponseSchema)
async def chat(req: ChatRequestSchema, session: AdvisorSession = Depends(get_session)):
    try:
        await session.send_message(req.text)
    except SubmissionInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _transcript(session)


@router.post("/routine", response_model=TranscriptResponseSchema)
async def routine(session: AdvisorSession = Depends(get_session)):
    try:
        await session.generate_routine()
    except SubmissionInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _transcript(session)
