"""Tool Invocation Round Trip

An assistant with a single ``search`` tool. The model is told about the
tool in the prompt, replies with ``<search>...</search>``, the tool runs,
its output is appended as ``search_output``, and the model is called once
more to answer with the result in view.

Demonstrates: Assistant, Tool.from_function(), add_message_and_run(),
              auto_tool_execution, AssistantConfig
"""

import logging
import os

from dotenv import load_dotenv

from relay import Assistant, AssistantConfig, Tool
from relay.llm import OpenAIClient

load_dotenv()

RELAY_OPENAI_API_KEY = os.environ["RELAY_OPENAI_API_KEY"]
MODEL_ID = os.environ.get("RELAY_MODEL", "gpt-4o-mini")

FAKE_INDEX = {
    "paris": "Paris: 21C, light clouds, wind 10 km/h.",
    "tokyo": "Tokyo: 28C, humid, chance of thunderstorms.",
}


def search(query: str) -> str:
    """Look up the current weather for a city. Input is a free-text query."""
    for city, report in FAKE_INDEX.items():
        if city in query.lower():
            return report
    return "No results."


def main():
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    with OpenAIClient(api_key=RELAY_OPENAI_API_KEY, default_model=MODEL_ID) as llm:
        assistant = Assistant(
            name="weather",
            llm=llm,
            tools=[Tool.from_function(search)],
            instructions=(
                "You answer weather questions. Call the search tool when you "
                "need data, then answer in one sentence."
            ),
            config=AssistantConfig(model_name=MODEL_ID, reserve_tokens=512),
        )

        messages = assistant.add_message_and_run(
            "What's the weather in Paris right now?",
            auto_tool_execution=True,
        )

        print("=" * 60)
        for message in messages:
            print(message)
        print("=" * 60)


if __name__ == "__main__":
    main()
