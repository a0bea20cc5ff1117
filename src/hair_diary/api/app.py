"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Header, HTTPException, Request, Response, status

from hair_diary.api.models import EntryForm
from hair_diary.app_logging import configure_logging
from hair_diary.containers import AppContainer
from hair_diary.domain.entries import Entry, Photo, PhotoSlot
from hair_diary.services.diary import DiaryService, Spread


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Hair Dye Diary")
    app.state.container = container

    # Handlers stay async so store read-modify-writes never overlap in the threadpool.
    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/entries")
    async def list_entries(request: Request) -> dict[str, object]:
        """Return all entries, oldest first."""
        diary = _diary(request)
        return {"entries": [_format_entry(entry) for entry in diary.entries()]}

    @app.post("/entries", status_code=status.HTTP_201_CREATED)
    async def create_entry(form: EntryForm, request: Request) -> dict[str, object]:
        """Record a new entry from the form."""
        entry = _diary(request).submit(form.to_draft())
        logger.info("Entry created via form: id=%s", entry.id)
        return _format_entry(entry)

    @app.get("/entries/{entry_id}")
    async def get_entry(entry_id: str, request: Request) -> dict[str, object]:
        """Return one entry, e.g. to prefill the edit form."""
        return _format_entry(_require_entry(_diary(request).get(entry_id)))

    @app.put("/entries/{entry_id}")
    async def edit_entry(
        entry_id: str, form: EntryForm, request: Request
    ) -> dict[str, object]:
        """Replace an entry's fields with the edited form."""
        entry = _diary(request).edit(entry_id, form.to_draft())
        return _format_entry(_require_entry(entry))

    @app.delete("/entries/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_entry(entry_id: str, request: Request) -> Response:
        """Delete an entry."""
        if not _diary(request).delete(entry_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @app.put("/entries/{entry_id}/photos/{slot}")
    async def upload_photo(
        entry_id: str,
        slot: PhotoSlot,
        request: Request,
        content_type: str = Header(default="application/octet-stream"),
        x_filename: str | None = Header(default=None),
    ) -> dict[str, object]:
        """Attach an image to a photo slot, replacing any previous one."""
        content = await request.body()
        if not content:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="Empty photo upload",
            )
        photo = Photo(
            content=content,
            filename=x_filename or f"{slot}-photo",
            content_type=content_type,
        )
        entry = _diary(request).upload_photo(entry_id, slot, photo)
        return _format_entry(_require_entry(entry))

    @app.get("/entries/{entry_id}/photos/{slot}")
    async def get_photo(entry_id: str, slot: PhotoSlot, request: Request) -> Response:
        """Return the raw image held in a slot."""
        entry = _require_entry(_diary(request).get(entry_id))
        photo = entry.photo_in(slot)
        if photo is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return Response(content=photo.content, media_type=photo.content_type)

    @app.delete("/entries/{entry_id}/photos/{slot}")
    async def remove_photo(
        entry_id: str, slot: PhotoSlot, request: Request
    ) -> dict[str, object]:
        """Clear a photo slot."""
        entry = _diary(request).upload_photo(entry_id, slot, None)
        return _format_entry(_require_entry(entry))

    @app.get("/logbook")
    async def logbook(request: Request) -> dict[str, object]:
        """Return the open spread of the logbook."""
        return _format_spread(_diary(request).spread())

    @app.post("/logbook/next")
    async def logbook_next(request: Request) -> dict[str, object]:
        """Turn to the next spread."""
        return _format_spread(_diary(request).next_page())

    @app.post("/logbook/previous")
    async def logbook_previous(request: Request) -> dict[str, object]:
        """Turn to the previous spread."""
        return _format_spread(_diary(request).previous_page())

    return app


def _diary(request: Request) -> DiaryService:
    container: AppContainer = request.app.state.container
    return container.diary_service


def _require_entry(entry: Entry | None) -> Entry:
    if entry is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return entry


def _format_entry(entry: Entry) -> dict[str, object]:
    return {
        "id": entry.id,
        "date": entry.date,
        "name": entry.name,
        "formulas": [
            {"shade": formula.shade, "parts": formula.parts, "color": formula.color}
            for formula in entry.formulas
        ],
        "developer": entry.developer,
        "processingTime": entry.processing_time,
        "notes": entry.notes,
        "hasBeforePhoto": entry.before_photo is not None,
        "hasAfterPhoto": entry.after_photo is not None,
        "hasPhoto": entry.photo is not None,
    }


def _format_spread(spread: Spread) -> dict[str, object]:
    return {
        "currentPage": spread.current_page,
        "totalPages": spread.total_pages,
        "turning": spread.turning,
        "left": _format_entry(spread.left) if spread.left else None,
        "right": _format_entry(spread.right) if spread.right else None,
        "isEmpty": spread.is_empty,
        "canGoNext": spread.can_go_next,
        "canGoPrevious": spread.can_go_previous,
    }
