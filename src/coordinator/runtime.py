import argparse
import asyncio
import json
import logging
from typing import Optional, Sequence

from dotenv import load_dotenv
from pydantic import ValidationError as SettingsError

from .core.config import AgentConfig
from .core.events import ListEventSink, LoggingEventSink
from .core.types import Message
from .specialists.factory import build_orchestration_context
from .specialists.service import AgentService

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the multi-agent coordinator from the CLI")
    parser.add_argument("--query", required=True, help="User request to process")
    parser.add_argument("--mode", choices=["plan", "route"], default="route")
    parser.add_argument("--agent", default=None, help="Pre-select an agent id instead of routing")
    parser.add_argument("--session", default=None, help="Opaque session value enabling web and document tools")
    parser.add_argument("--log-level", default=None)
    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)


async def run(config: AgentConfig, args: argparse.Namespace) -> ListEventSink:
    sink = ListEventSink()
    context = build_orchestration_context(
        config,
        event_sink=LoggingEventSink(sink),
        session=args.session,
    )
    service = AgentService(context, selected_agent_id=args.agent)
    messages = [Message(role="user", content=args.query)]
    if args.mode == "plan":
        manager = await service.process_with_plan(messages)
        logging.getLogger(__name__).info(
            "state_history=%s", [state.value for state in manager.state_history]
        )
    else:
        await service.process_messages(messages)
    return sink


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_dotenv()
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    try:
        config = AgentConfig.from_env()
        if args.log_level:
            config = AgentConfig.model_validate({**config.model_dump(), "log_level": args.log_level})
    except SettingsError as exc:
        print(f"startup_error=invalid configuration: {exc}")
        return 2

    configure_logging(config.log_level)
    sink = asyncio.run(run(config, args))
    for record in sink.records:
        print(json.dumps(record))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
