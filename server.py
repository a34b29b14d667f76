import logging
from typing import Any

from fastapi import Body, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from storyboard.entities import Comment, CommentDraft, Note, NoteDraft, clean_text
from storyboard.log_utils import configure_logging
from storyboard.settings import DATA_PATH, HOST, PORT
from storyboard.store import NoteStore

logger = logging.getLogger("storyboard_server")


def _store(request: Request) -> NoteStore:
    return request.app.state.store


def create_app(store: NoteStore) -> FastAPI:
    app = FastAPI(title="Storyboard")
    app.state.store = store

    # CORS configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Allow all origins for dev
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/notes")
    async def list_notes(request: Request):
        notes = _store(request).list_notes()
        return [Note.model_validate(n).to_wire() for n in notes]

    @app.post("/notes", status_code=201)
    async def create_note(request: Request, draft: NoteDraft):
        if not clean_text(draft.use_case):
            raise HTTPException(status_code=400, detail="'useCase' is required")
        note = _store(request).create_note(draft)
        return Note.model_validate(note).to_wire()

    @app.patch("/notes/{note_id}")
    async def update_note(request: Request, note_id: str, changes: dict[str, Any] = Body(...)):
        note = _store(request).update_position(note_id, changes)
        if note is None:
            raise HTTPException(status_code=404, detail="Not found")
        return Note.model_validate(note).to_wire()

    @app.delete("/notes/{note_id}")
    async def delete_note(request: Request, note_id: str):
        if not _store(request).delete_note(note_id):
            raise HTTPException(status_code=404, detail="Not found")
        return {"success": True}

    @app.post("/notes/{note_id}/comments", status_code=201)
    async def add_comment(request: Request, note_id: str, draft: CommentDraft):
        if not clean_text(draft.text):
            raise HTTPException(status_code=400, detail="Comment text is required")
        comment = _store(request).add_comment(note_id, draft.author, draft.text)
        if comment is None:
            raise HTTPException(status_code=404, detail="Note not found")
        return Comment.model_validate(comment).to_wire()

    return app


app = create_app(NoteStore(DATA_PATH))

if __name__ == "__main__":
    import uvicorn
    configure_logging()
    logger.info(f"Serving notes from {DATA_PATH}")
    uvicorn.run(app, host=HOST, port=PORT)
