"""
History router - Browse, reload and clear past generations.

Endpoints:
- GET    /history              Newest first
- DELETE /history              Remove everything
- POST   /history/{id}/load    Put an item's HTML back into the preview
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from webmaker.deps import get_history_store, get_orchestrator
from webmaker.generation import NO_HTML_MESSAGE, GenerationOrchestrator, NotifyLevel
from webmaker.history import HistoryItem, HistoryStore
from webmaker.schemas.api import Notice


router = APIRouter(prefix="/history", tags=["history"])


@router.get("", response_model=List[HistoryItem], response_model_by_alias=True)
def list_history(history: HistoryStore = Depends(get_history_store)):
    return history.list()


@router.delete("", response_model=Notice)
def clear_history(history: HistoryStore = Depends(get_history_store)):
    history.clear()
    return Notice(message="History cleared.", level=NotifyLevel.INFO.value)


@router.post("/{item_id}/load", response_model=Notice)
def load_history_item(
    item_id: str,
    history: HistoryStore = Depends(get_history_store),
    orchestrator: GenerationOrchestrator = Depends(get_orchestrator),
):
    item = history.get(item_id)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="History item not found")

    if not orchestrator.preview.load_into_preview(item.html):
        return Notice(message=NO_HTML_MESSAGE, level=NotifyLevel.WARN.value)
    return Notice(message="Loaded into preview.", level=NotifyLevel.SUCCESS.value)
