"""Tavily-backed web search tool with step-by-step progress records.

Flow:
- pad short queries (Tavily rejects queries under 5 characters)
- stream ``search-status``/``search-query``/``search-step`` records
- call the Tavily search endpoint
- tag each result with its source domain
"""

import json
import logging
import re
from typing import Any, Mapping, Optional
from urllib.parse import urlparse

import httpx
from langsmith.run_helpers import traceable

from ..core.config import AgentConfig
from ..core.event_types import ToolEvent
from ..core.events import EventSink
from ..core.types import ToolMetadata

logger = logging.getLogger(__name__)

SEARCH_TOOL_NAME = "search_the_web"
TAVILY_URL = "https://api.tavily.com/search"

_QUESTION_WORDS = re.compile(r"\b(what|how|when|where|why|is|are|can|do|does|did)\b", re.IGNORECASE)

SEARCH_METADATA = ToolMetadata(
    name=SEARCH_TOOL_NAME,
    description="Search the web for information",
    capabilities=["web-search", "information-gathering", "current-events"],
    parameters={
        "type": "object",
        "properties": {
            "query": {"type": "string", "description": "The search query."},
            "max_results": {"type": "integer", "description": "Maximum number of results."},
            "search_depth": {"type": "string", "enum": ["basic", "advanced"]},
            "include_domains": {"type": "array", "items": {"type": "string"}},
            "exclude_domains": {"type": "array", "items": {"type": "string"}},
        },
        "required": ["query"],
    },
    requires_auth=True,
    is_expensive=True,
)


def pad_query(query: str) -> str:
    return query if len(query) >= 5 else query + " " * (5 - len(query))


def main_topic(query: str) -> str:
    return " ".join(_QUESTION_WORDS.sub("", query).split())


def related_queries(original_query: str, topic: str) -> list[str]:
    base = [f"{topic} latest developments", f"{topic} analysis", f"{topic} trends"]
    return [q for q in base if q != original_query and q not in original_query]


def source_domain(url: str) -> Optional[str]:
    host = urlparse(url).hostname or ""
    if not host:
        return None
    label = host.removeprefix("www.").split(".")[0].lower()
    return label or None


def make_search_tool(
    config: AgentConfig,
    event_sink: Optional[EventSink] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
):
    def emit(record_type: str, content: Any) -> None:
        if event_sink is not None:
            record: ToolEvent = {"type": record_type, "content": content}
            event_sink.write_data(record)

    @traceable(name="tools.search_the_web", run_type="tool")
    async def search_the_web(parameters: Mapping[str, Any]) -> dict[str, Any]:
        query = pad_query(str(parameters.get("query", "")))
        topic = main_topic(query)
        emit("search-status", "starting")
        emit("search-query", query)
        emit("search-step", json.dumps({"title": f"Researching {topic}", "completed": False, "type": "search", "query": query}))

        try:
            data = await _tavily_search(
                config,
                query=query,
                max_results=int(parameters.get("max_results") or config.search_max_results),
                search_depth=str(parameters.get("search_depth") or "basic"),
                include_domains=list(parameters.get("include_domains") or []),
                exclude_domains=list(parameters.get("exclude_domains") or []),
                transport=transport,
            )
        except (httpx.HTTPError, RuntimeError) as exc:
            logger.error("Search API error: %s", exc)
            emit("search-error", json.dumps({"message": "Search failed"}))
            return {"results": [], "query": query, "images": [], "number_of_results": 0}

        results = list(data.get("results") or [])
        sources: list[str] = []
        for item in results:
            domain = source_domain(str(item.get("url", "")))
            if domain:
                item["source"] = domain
                if domain not in sources:
                    sources.append(domain)

        emit(
            "search-step",
            json.dumps({"title": f"Researching {topic}", "completed": True, "type": "search", "query": query, "results": results}),
        )
        emit(
            "search-step",
            json.dumps(
                {
                    "title": f"Investigating additional aspects of {topic}",
                    "completed": True,
                    "type": "search",
                    "query": query,
                    "additional_queries": related_queries(query, topic),
                    "sources": sources[:8],
                }
            ),
        )
        emit("search-status", "completed")
        return {
            "results": results,
            "query": query,
            "images": list(data.get("images") or []),
            "answer": data.get("answer"),
            "number_of_results": len(results),
            "sources": sources,
        }

    return search_the_web


async def _tavily_search(
    config: AgentConfig,
    *,
    query: str,
    max_results: int,
    search_depth: str,
    include_domains: list[str],
    exclude_domains: list[str],
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> dict[str, Any]:
    if not config.tavily_api_key:
        raise RuntimeError("TAVILY_API_KEY is not set in the environment variables")
    body = {
        "api_key": config.tavily_api_key,
        "query": query,
        "max_results": max(max_results, 5),
        "search_depth": search_depth if search_depth in {"basic", "advanced"} else "basic",
        "include_images": True,
        "include_answer": True,
        "include_domains": include_domains,
        "exclude_domains": exclude_domains,
    }
    async with httpx.AsyncClient(timeout=config.search_timeout_seconds, transport=transport) as client:
        response = await client.post(TAVILY_URL, json=body, headers={"Content-Type": "application/json"})
        response.raise_for_status()
        try:
            payload = response.json()
        except ValueError as exc:
            raise RuntimeError(f"Search API returned a non-JSON body: {exc}") from exc
    return payload if isinstance(payload, dict) else {}
