"""Session-scoped document creation and editing tools."""

import uuid
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..core.event_types import DocumentEvent
from ..core.events import EventSink
from ..core.generation import GenerationCapability
from ..core.providers import ARTIFACT_MODEL
from ..core.types import ToolMetadata
from ..prompts import documents as document_prompts

CREATE_DOCUMENT_TOOL_NAME = "create_document"
UPDATE_DOCUMENT_TOOL_NAME = "update_document"


@dataclass
class Document:
    id: str
    title: str
    kind: str
    content: str


class DocumentStore:
    """In-process document store owned by one orchestration context."""

    def __init__(self):
        self._documents: dict[str, Document] = {}

    def save(self, document: Document) -> Document:
        self._documents[document.id] = document
        return document

    def get(self, document_id: str) -> Optional[Document]:
        return self._documents.get(document_id)

    def require(self, document_id: str) -> Document:
        document = self._documents.get(document_id)
        if document is None:
            raise KeyError(f"Document not found: {document_id}")
        return document


CREATE_DOCUMENT_METADATA = ToolMetadata(
    name=CREATE_DOCUMENT_TOOL_NAME,
    description="Create a document (essay, email, code, notes) for substantial writing tasks.",
    capabilities=["content-creation", "document-editing"],
    parameters={
        "type": "object",
        "properties": {
            "title": {"type": "string", "description": "Document title."},
            "kind": {"type": "string", "enum": ["text", "code", "email"], "description": "Document kind."},
        },
        "required": ["title"],
    },
    requires_auth=True,
    is_expensive=True,
)

UPDATE_DOCUMENT_METADATA = ToolMetadata(
    name=UPDATE_DOCUMENT_TOOL_NAME,
    description="Update an existing document following a description of the requested changes.",
    capabilities=["document-editing"],
    parameters={
        "type": "object",
        "properties": {
            "id": {"type": "string", "description": "Id of the document to update."},
            "description": {"type": "string", "description": "Changes to apply."},
        },
        "required": ["id", "description"],
    },
    requires_auth=True,
    is_expensive=True,
)


def make_document_tools(
    *,
    store: DocumentStore,
    generation: GenerationCapability,
    event_sink: Optional[EventSink],
    temperature: Optional[float] = None,
):
    def emit(document: Document) -> None:
        if event_sink is not None:
            record: DocumentEvent = {
                "type": "document",
                "id": document.id,
                "title": document.title,
                "content": document.content,
            }
            event_sink.write_data(record)

    async def create_document(parameters: Mapping[str, Any]) -> dict[str, Any]:
        title = str(parameters.get("title", "")).strip() or "Untitled"
        kind = str(parameters.get("kind", "text"))
        prompt = document_prompts.build_create_document_prompt(title=title, kind=kind)
        result = await generation.generate(prompt, model=ARTIFACT_MODEL, temperature=temperature)
        document = store.save(Document(id=str(uuid.uuid4()), title=title, kind=kind, content=result.text))
        emit(document)
        return {"id": document.id, "title": document.title, "kind": document.kind, "content": "Document created."}

    async def update_document(parameters: Mapping[str, Any]) -> dict[str, Any]:
        document = store.require(str(parameters.get("id", "")))
        description = str(parameters.get("description", "")).strip()
        prompt = document_prompts.build_update_document_prompt(
            title=document.title,
            content=document.content,
            description=description,
        )
        result = await generation.generate(prompt, model=ARTIFACT_MODEL, temperature=temperature)
        document.content = result.text
        emit(document)
        return {"id": document.id, "title": document.title, "kind": document.kind, "content": "Document updated."}

    return create_document, update_document
