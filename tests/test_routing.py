import json
import os
import unittest
from types import SimpleNamespace
from typing import get_args

from langchain_core.messages import AIMessage, ToolMessage
from pydantic import ValidationError as SchemaValidationError

from src.coordinator.core.config import AgentConfig
from src.coordinator.core.errors import ClassificationError
from src.coordinator.core.events import ListEventSink
from src.coordinator.core.generation import GenerationResult, StructuredResult
from src.coordinator.core.types import AgentMetadata, Message, ToolMetadata
from src.coordinator.specialists.base import AGENT_APOLOGY, AgentContext, AgentSpec, SpecializedAgent, message_text
from src.coordinator.specialists.catalog import AGENT_CATALOG, build_agent_spec
from src.coordinator.specialists.factory import AgentFactory, build_orchestration_context
from src.coordinator.specialists.router import NO_AGENT_APOLOGY, RouterAgent, build_routing_schema
from src.coordinator.specialists.service import SERVICE_APOLOGY, AgentService
from src.coordinator.tools.registry import ToolRegistry


def setUpModule():
    os.environ["LANGCHAIN_TRACING_V2"] = "false"


class RecordingAgent:
    def __init__(self, agent_id, name=None):
        self.agent_id = agent_id
        self.name = name or f"{agent_id.title()} Agent"
        self.received = []

    def get_id(self):
        return self.agent_id

    def get_name(self):
        return self.name

    def get_description(self):
        return f"Handles {self.agent_id} requests"

    def get_capabilities(self):
        return [self.agent_id]

    def metadata(self):
        return AgentMetadata(self.agent_id, self.name, self.get_description(), self.get_capabilities())

    def update_context(self, session=None, event_sink=None):
        pass

    async def process_messages(self, messages):
        self.received.append(list(messages))


class FakeRoutingGeneration:
    def __init__(self, decision=None, error=None, raw_object=None):
        self.decision = decision
        self.error = error
        self.raw_object = raw_object
        self.calls = []

    async def generate_structured(self, *, model, schema, system_prompt, prompt, temperature=None):
        self.calls.append(
            {"model": model, "schema": schema, "system_prompt": system_prompt, "prompt": prompt, "temperature": temperature}
        )
        if self.error is not None:
            raise self.error
        if self.raw_object is not None:
            return StructuredResult(object=self.raw_object)
        return StructuredResult(object=schema.model_validate(self.decision))

    async def generate(self, prompt, *, model, temperature=None):
        return GenerationResult(text="")


class FakeChatModel:
    def __init__(self, responses):
        self.responses = list(responses)
        self.bound_tools = None
        self.invocations = []

    def bind_tools(self, tools):
        self.bound_tools = tools
        return self

    async def ainvoke(self, messages):
        self.invocations.append(list(messages))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class FakeProvider:
    def __init__(self, model):
        self.model = model
        self.requests = []

    def language_model(self, model_id, temperature=None):
        self.requests.append((model_id, temperature))
        return self.model


def _user(text):
    return Message(role="user", content=text)


class RoutingSchemaTests(unittest.TestCase):
    def test_schema_restricts_agent_ids_and_bounds_confidence(self):
        schema = build_routing_schema(["chat", "research"])
        decision = schema(selected_agent_id="research", confidence=0.5, reasoning="needs the web")
        self.assertEqual(decision.selected_agent_id, "research")
        self.assertEqual(set(get_args(schema.model_fields["selected_agent_id"].annotation)), {"chat", "research"})
        with self.assertRaises(SchemaValidationError):
            schema(selected_agent_id="ghost", confidence=0.5, reasoning="x")
        with self.assertRaises(SchemaValidationError):
            schema(selected_agent_id="chat", confidence=1.5, reasoning="x")

    def test_empty_agent_list_is_a_classification_error(self):
        with self.assertRaises(ClassificationError):
            build_routing_schema([])

    def test_message_text_joins_text_parts_only(self):
        self.assertEqual(message_text("plain"), "plain")
        self.assertEqual(
            message_text([{"type": "text", "text": "a"}, {"type": "image", "url": "x"}, {"type": "text", "text": "b"}]),
            "a b",
        )
        self.assertEqual(message_text(None), "")


class RouterTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.sink = ListEventSink()
        self.context = AgentContext(config=AgentConfig(), event_sink=self.sink)
        self.chat = RecordingAgent("chat")
        self.research = RecordingAgent("research")
        self.document = RecordingAgent("document")

    def _router(self, generation, agents=None):
        agents = [self.chat, self.research, self.document] if agents is None else agents
        return RouterAgent(self.context, agents, generation=generation)

    async def test_routes_to_selected_agent_and_reports_confidence(self):
        generation = FakeRoutingGeneration(
            {"selected_agent_id": "research", "confidence": 0.87, "reasoning": "Needs current information"}
        )
        router = self._router(generation)
        messages = [_user("hi"), _user("What happened in the news today?")]
        await router.route(messages)

        self.assertEqual(self.research.received, [messages])
        self.assertEqual(self.chat.received, [])
        self.assertEqual(
            self.sink.texts(),
            [
                "Analyzing your request to determine the best specialized agent...",
                "Chosen agent: research",
                "Needs current information",
                "I've determined that the Research Agent is best suited to help you with this request (confidence: 87%).",
            ],
        )
        self.assertTrue(all(record["type"] == "thinking" for record in self.sink.records))
        self.assertIn("What happened in the news today?", generation.calls[0]["prompt"])
        self.assertNotIn('"hi"', generation.calls[0]["prompt"])
        self.assertEqual(generation.calls[0]["temperature"], 0.1)
        self.assertIs(router.selected_agent, self.research)

    async def test_low_confidence_does_not_gate_the_decision(self):
        generation = FakeRoutingGeneration({"selected_agent_id": "document", "confidence": 0.01, "reasoning": "unsure"})
        await self._router(generation).route([_user("write me a poem")])
        self.assertEqual(len(self.document.received), 1)

    async def test_unknown_agent_falls_back_to_chat(self):
        generation = FakeRoutingGeneration(
            raw_object=SimpleNamespace(selected_agent_id="ghost", confidence=0.9, reasoning="made up")
        )
        await self._router(generation).route([_user("hello")])
        self.assertEqual(len(self.chat.received), 1)
        self.assertIn(
            "I couldn't determine the best agent for your request. Falling back to general chat...",
            self.sink.texts(),
        )

    async def test_generation_failure_falls_back_to_chat(self):
        generation = FakeRoutingGeneration(error=RuntimeError("structured output failed"))
        await self._router(generation).route([_user("hello")])
        self.assertEqual(len(self.chat.received), 1)
        self.assertEqual(self.research.received, [])

    async def test_fallback_without_chat_uses_first_agent(self):
        generation = FakeRoutingGeneration(error=RuntimeError("down"))
        await self._router(generation, agents=[self.document, self.research]).route([_user("hello")])
        self.assertEqual(len(self.document.received), 1)

    async def test_fallback_without_agents_emits_apology(self):
        await self._router(FakeRoutingGeneration(error=RuntimeError("down")), agents=[]).route([_user("hello")])
        messages = self.sink.of_type("assistant_message")
        self.assertEqual(messages[0]["message"]["parts"], [NO_AGENT_APOLOGY])
        self.assertEqual(messages[0]["message"]["role"], "assistant")

    async def test_router_prompt_lists_agent_metadata(self):
        generation = FakeRoutingGeneration({"selected_agent_id": "chat", "confidence": 1, "reasoning": "chat"})
        await self._router(generation).route([_user("hello")])
        system_prompt = generation.calls[0]["system_prompt"]
        self.assertIn('Research Agent ("research")', system_prompt)
        self.assertIn("Handles document requests", system_prompt)

    async def test_missing_event_sink_raises_value_error(self):
        router = RouterAgent(AgentContext(config=AgentConfig()), [self.chat], generation=FakeRoutingGeneration())
        with self.assertRaises(ValueError):
            await router.route([_user("hello")])


class SpecializedAgentTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.sink = ListEventSink()
        self.tools = ToolRegistry()
        self.thoughts = []

        async def think(parameters):
            self.thoughts.append(parameters["thought"])
            return {"thought": parameters["thought"]}

        self.tools.register_tool("think", think, ToolMetadata(name="think", description="Think"))
        self.spec = AgentSpec(
            id="chat",
            name="Chat Agent",
            description="General conversation",
            model="chat-model",
            system_prompt="Be friendly.",
            tool_names=("think", "search_the_web"),
            capabilities=("general-conversation",),
            max_steps=3,
        )

    def _agent(self, model):
        context = AgentContext(config=AgentConfig(), event_sink=self.sink, provider=FakeProvider(model))
        return SpecializedAgent(self.spec, context, self.tools)

    async def test_tool_loop_executes_tool_calls_and_emits_final_answer(self):
        model = FakeChatModel(
            [
                AIMessage(content="", tool_calls=[{"name": "think", "args": {"thought": "2+2 is 4"}, "id": "call_1"}]),
                AIMessage(content="The answer is 4."),
            ]
        )
        agent = self._agent(model)
        await agent.process_messages([_user("What's 2+2?")])

        self.assertEqual(self.thoughts, ["2+2 is 4"])
        self.assertEqual([schema["function"]["name"] for schema in model.bound_tools], ["think"])
        tool_message = model.invocations[1][-1]
        self.assertIsInstance(tool_message, ToolMessage)
        self.assertEqual(tool_message.tool_call_id, "call_1")
        self.assertEqual(json.loads(tool_message.content), {"thought": "2+2 is 4"})
        self.assertEqual(self.sink.texts(), ["Now processing your request with the Chat Agent..."])
        answer = self.sink.of_type("assistant_message")[0]
        self.assertEqual(answer["message"]["parts"], ["The answer is 4."])

    async def test_unavailable_tool_call_is_reported_back_to_the_model(self):
        model = FakeChatModel(
            [
                AIMessage(content="", tool_calls=[{"name": "search_the_web", "args": {"query": "x"}, "id": "c1"}]),
                AIMessage(content="I cannot search right now."),
            ]
        )
        await self._agent(model).process_messages([_user("search")])
        tool_message = model.invocations[1][-1]
        self.assertEqual(json.loads(tool_message.content), {"error": "Tool not found: search_the_web"})

    async def test_loop_is_bounded_by_max_steps(self):
        looping = AIMessage(content="still thinking", tool_calls=[{"name": "think", "args": {"thought": "t"}, "id": "c"}])
        model = FakeChatModel([looping] * 5)
        await self._agent(model).process_messages([_user("loop")])
        self.assertEqual(len(model.invocations), 3)
        self.assertEqual(self.sink.of_type("assistant_message")[0]["message"]["parts"], ["still thinking"])

    async def test_generation_failure_emits_apology(self):
        model = FakeChatModel([RuntimeError("rate limited")])
        with self.assertLogs("src.coordinator.specialists.base", level="ERROR"):
            await self._agent(model).process_messages([_user("hello")])
        self.assertEqual(self.sink.of_type("assistant_message")[0]["message"]["parts"], [AGENT_APOLOGY])

    def test_metadata_and_active_tools(self):
        agent = self._agent(FakeChatModel([]))
        self.assertEqual(agent.get_active_tool_names(), ["think"])
        self.assertEqual(list(agent.get_tools()), ["think"])
        self.assertEqual(
            agent.metadata(),
            AgentMetadata(id="chat", name="Chat Agent", description="General conversation", capabilities=["general-conversation"]),
        )

    def test_update_context_replaces_only_provided_fields(self):
        agent = self._agent(FakeChatModel([]))
        new_sink = ListEventSink()
        agent.update_context(event_sink=new_sink)
        self.assertIs(agent.context.event_sink, new_sink)
        self.assertIsNone(agent.context.session)
        agent.update_context(session="user-1")
        self.assertEqual(agent.context.session, "user-1")
        self.assertIs(agent.context.event_sink, new_sink)


class CatalogAndFactoryTests(unittest.IsolatedAsyncioTestCase):
    def test_catalog_is_closed(self):
        self.assertEqual(set(AGENT_CATALOG), {"chat", "research", "document"})
        with self.assertRaises(KeyError):
            build_agent_spec("ghost", AgentContext(config=AgentConfig()))

    def test_session_enables_search_and_document_tools(self):
        without_session = AgentContext(config=AgentConfig())
        with_session = AgentContext(config=AgentConfig(), session="user-1")
        self.assertEqual(build_agent_spec("research", without_session).tool_names, ("think",))
        self.assertEqual(build_agent_spec("research", with_session).tool_names, ("think", "search_the_web"))
        self.assertIn("update_document", build_agent_spec("document", with_session).tool_names)
        self.assertEqual(build_agent_spec("chat", with_session).max_steps, 3)
        self.assertEqual(build_agent_spec("document", with_session).model, "artifact-model")

    def test_orchestration_context_wires_factory_and_tools(self):
        context = build_orchestration_context(AgentConfig(), session="user-1", provider=FakeProvider(FakeChatModel([])))
        factory = context.factory
        self.assertIsInstance(factory, AgentFactory)
        self.assertEqual([agent.get_id() for agent in factory.get_specialized_agents()], ["chat", "research", "document"])
        self.assertEqual(factory.get_router_agent().get_id(), "router")
        self.assertIs(factory.get_agent("router"), factory.get_router_agent())
        self.assertIsNone(factory.get_agent("ghost"))
        with self.assertRaises(ClassificationError):
            factory.require_agent("ghost")
        self.assertIn("search_the_web", context.tools)
        self.assertIn("create_document", context.tools)

    def test_context_without_session_registers_only_think(self):
        context = build_orchestration_context(AgentConfig(), provider=FakeProvider(FakeChatModel([])))
        self.assertEqual([metadata.name for metadata in context.tools.get_all_metadata()], ["think"])

    def test_factory_update_context_reaches_every_agent(self):
        context = build_orchestration_context(AgentConfig(), provider=FakeProvider(FakeChatModel([])))
        sink = ListEventSink()
        context.factory.update_context(session="user-2", event_sink=sink)
        for agent in context.factory.get_all_agents():
            self.assertIs(agent.context.event_sink, sink)
            self.assertEqual(agent.context.session, "user-2")


class AgentServiceTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.sink = ListEventSink()
        self.model = FakeChatModel([AIMessage(content="Hello there!")])
        self.context = build_orchestration_context(
            AgentConfig(),
            event_sink=self.sink,
            provider=FakeProvider(self.model),
            generation=FakeRoutingGeneration({"selected_agent_id": "chat", "confidence": 0.9, "reasoning": "small talk"}),
        )

    async def test_preselected_agent_skips_routing(self):
        service = AgentService(self.context, selected_agent_id="chat")
        await service.process_messages([_user("hello")])
        self.assertEqual(self.sink.texts()[0], "Using the Chat Agent for your request...")
        self.assertNotIn("Analyzing your request to determine the best specialized agent...", self.sink.texts())
        self.assertEqual(self.sink.of_type("assistant_message")[0]["message"]["parts"], ["Hello there!"])

    async def test_without_preselection_routes(self):
        service = AgentService(self.context)
        await service.process_messages([_user("hello")])
        self.assertIn("Chosen agent: chat", self.sink.texts())
        self.assertEqual(self.sink.of_type("assistant_message")[0]["message"]["parts"], ["Hello there!"])

    async def test_unexpected_failure_becomes_apology(self):
        service = AgentService(self.context, selected_agent_id="chat")
        failing = RecordingAgent("chat")

        async def explode(messages):
            raise RuntimeError("boom")

        failing.process_messages = explode
        service.current_agent = failing
        await service.process_messages([_user("hello")])
        self.assertEqual(self.sink.of_type("assistant_message")[-1]["message"]["parts"], [SERVICE_APOLOGY])

    async def test_missing_event_sink_raises_value_error(self):
        context = build_orchestration_context(AgentConfig(), provider=FakeProvider(self.model))
        with self.assertRaises(ValueError):
            await AgentService(context).process_messages([_user("hello")])

    def test_agent_selection_helpers(self):
        service = AgentService(self.context)
        self.assertTrue(service.set_current_agent("document"))
        self.assertEqual(service.current_agent.get_id(), "document")
        self.assertFalse(service.set_current_agent("ghost"))
        self.assertEqual(service.get_agent("research").get_name(), "Research Agent")
        self.assertNotIn("router", [agent.get_id() for agent in service.get_available_agents()])


if __name__ == "__main__":
    unittest.main()
