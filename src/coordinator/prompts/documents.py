"""Document tool prompt templates and builders."""

CREATE_DOCUMENT_SYSTEM_PROMPT = """Write the requested document in full.
Use markdown where helpful. For code, return only the code. For emails, include a subject line."""

UPDATE_DOCUMENT_SYSTEM_PROMPT = """Improve the following document based on the given description.
Return the full updated document only."""


def build_create_document_prompt(title: str, kind: str):
    return [
        ("system", CREATE_DOCUMENT_SYSTEM_PROMPT),
        ("human", f"Kind: {kind}\nTitle: {title}"),
    ]


def build_update_document_prompt(title: str, content: str, description: str):
    return [
        ("system", UPDATE_DOCUMENT_SYSTEM_PROMPT),
        ("human", f"Title: {title}\n\nDocument:\n{content}\n\nRequested changes: {description}"),
    ]
