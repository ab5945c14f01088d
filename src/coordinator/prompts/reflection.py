"""Reflection prompt templates and builders."""

REFLECTION_SYSTEM_PROMPT = """You are a reflection agent that analyzes the execution of a plan and identifies insights and improvements.

Your task is to:
1. Determine if the plan execution was successful.
2. Identify key insights from the execution.
3. Suggest specific improvements for future executions.
4. Provide overall feedback on the execution process.

Return your reflection in JSON format:
{
  "success": true,
  "insights": ["insight1", "insight2"],
  "improvements": ["improvement1", "improvement2"],
  "feedback": "overall feedback"
}

Be specific and actionable in your improvements.
Always respond with a valid JSON object without any additional text before or after.
"""

REFLECTION_USER_PROMPT_TEMPLATE = """Plan:
{plan_json}

Execution Result:
{result_json}
"""


def build_reflection_prompt(plan_json: str, result_json: str):
    return [
        ("system", REFLECTION_SYSTEM_PROMPT),
        ("human", REFLECTION_USER_PROMPT_TEMPLATE.format(plan_json=plan_json, result_json=result_json)),
    ]
