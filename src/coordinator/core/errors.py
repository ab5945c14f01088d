"""Error taxonomy for planning, tool execution, routing and orchestration."""


class CoordinatorError(RuntimeError):
    pass


class ParseError(CoordinatorError):
    """No JSON object could be located or decoded in model output."""


class ValidationError(CoordinatorError):
    """JSON decoded but is missing required structure."""


class ToolNotFoundError(CoordinatorError):
    def __init__(self, tool_name: str):
        super().__init__(f"Tool not found: {tool_name}")
        self.tool_name = tool_name


class ToolExecutionError(CoordinatorError):
    def __init__(self, tool_name: str, cause: BaseException):
        super().__init__(str(cause))
        self.tool_name = tool_name
        self.cause = cause


class ClassificationError(CoordinatorError):
    pass


class OrchestrationError(CoordinatorError):
    pass
