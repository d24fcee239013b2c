import argparse
import json
import os
import sys

# Ensure src is in pythonpath
sys.path.append(os.path.join(os.path.dirname(__file__), "..", "src"))

from dotenv import load_dotenv
load_dotenv()

from kb_chat_server.config import settings
from kb_chat_server.knowledge.loader import load_knowledge_base
from kb_chat_server.matching.config import MatchConfig
from kb_chat_server.matching.engine import match


def main():
    parser = argparse.ArgumentParser(description="Ask the knowledge base a question.")
    parser.add_argument("question", help="Free-text question")
    parser.add_argument("--topic", default=None, help="Restrict keyword search to one topic id")
    parser.add_argument("--knowledge-dir", default=settings.knowledge_dir)
    args = parser.parse_args()

    config = MatchConfig.from_settings()
    kb = load_knowledge_base(
        args.knowledge_dir,
        settings.topic_ids,
        fuzzy_threshold=config.fuzzy_threshold,
    )
    print(f"Loaded {len(kb)} topics, {len(kb.entries)} questions.", file=sys.stderr)

    response = match(kb, args.question, args.topic, config=config)
    print(json.dumps(response.model_dump(exclude_none=True), ensure_ascii=False, indent=2))

if __name__ == "__main__":
    main()
