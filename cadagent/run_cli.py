import argparse
from pathlib import Path

from cadagent import config
from cadagent.commands import ai_audit_layers, ai_chat, ai_draw, apply_plan
from cadagent.errors import ApiKeyError
from cadagent.llm import LlmClient
from cadagent.logging_config import setup_logging
from cadagent.space import Space

HELP = "Commands: draw <request> | chat <message> | audit | list | quit"


def _print_entities(space: Space):
    live = space.live_entities()
    print(f"\n=== Model space: {len(live)} entities ===")
    for i, ent in enumerate(live, 1):
        print(f" {i:>3}. {ent.describe()}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Drive an in-memory drawing with an AI plan.")
    parser.add_argument("--plan", type=Path, help="apply a JSON plan file and exit")
    parser.add_argument("--log-level", default=config.LOG_LEVEL)
    parser.add_argument("--log-file")
    args = parser.parse_args(argv)

    setup_logging(args.log_level, args.log_file)
    space = Space()

    if args.plan:
        outcome = apply_plan(args.plan.read_text(encoding="utf-8"), space)
        print(outcome.message)
        _print_entities(space)
        return 0 if outcome.ok else 1

    try:
        client = LlmClient.from_config()
    except ApiKeyError as e:
        print(f"[API KEY ERROR] {e}")
        return 1

    print(HELP)
    while True:
        try:
            line = input("> ").strip()
        except EOFError:
            break
        cmd, _, rest = line.partition(" ")
        cmd = cmd.lower()

        if cmd in ("quit", "exit"):
            break
        if cmd == "draw" and rest:
            for msg in ai_draw(space, rest, client.plan_text):
                print(msg)
        elif cmd == "chat" and rest:
            print(ai_chat(space, rest, client.chat_text))
        elif cmd == "audit":
            for msg in ai_audit_layers(space):
                print(msg)
        elif cmd == "list":
            _print_entities(space)
        elif line:
            print(HELP)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
