#!/usr/bin/env python3
"""
# Knowledge Chat Console

Interactive console over the company knowledge base. Every question is
grounded in the snippets the retriever ranks highest before it is sent to
the configured LLM backend.

Usage: ``python main.py [config.yaml]``
"""

import logging
import sys

from knowledge_context import ChatAssistant

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


# Example usage
if __name__ == "__main__":
    config_path = sys.argv[1] if len(sys.argv) > 1 else None
    assistant = ChatAssistant.from_config(config_path)
    history: list[dict[str, str]] = []

    print("\n📚 Knowledge Chat 📚\n")
    print("Ask about products, services, locations or contacts.")
    print("Type 'exit' to quit.")

    # Interactive loop
    while True:
        user_input = input("\n> ")
        if user_input.lower() == "exit":
            print("\nGoodbye! 👋")
            break
        if not user_input.strip():
            continue

        result = assistant.answer(user_input, history)
        history.append({"role": "user", "content": user_input})
        history.append({"role": "assistant", "content": result.answer})

        print(result.answer)
