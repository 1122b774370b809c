import argparse
import asyncio
import json
import sys
from typing import List, Optional

from dotenv import load_dotenv, find_dotenv

from agents.orchestrator_agent import OrchestratorAgent
from models import (
    CATEGORIES,
    Category,
    InterviewEvent,
    InterviewState,
    InterviewStep,
    ParsedEvaluation,
    find_category,
)
from parsers import format_question_markdown, parse_evaluation, parse_question_response
from tools.export import HistoryStore, save_transcript_json
from tools.llm_client import LLMError
from utils.config import load_config
from utils.logging import get_logger, setup_logging

load_dotenv(find_dotenv(), override=False)


logger = get_logger(__name__)


def choose_category(key: Optional[str]) -> Optional[Category]:
    if key:
        return find_category(key)
    for index, cat in enumerate(CATEGORIES, start=1):
        print(f"{index}. {cat.name}")
    choice = input("Pick a category: ").strip()
    if choice.isdigit() and 1 <= int(choice) <= len(CATEGORIES):
        return CATEGORIES[int(choice) - 1]
    return find_category(choice)


def render_feedback(parsed: ParsedEvaluation) -> str:
    lines = [f"Score: {parsed.score:g}/5"]
    for title, items in (
        ("Strengths", parsed.strengths),
        ("Areas for Improvement", parsed.improvements),
        ("Key Points Missed", parsed.missed_points),
    ):
        if items:
            lines.append(f"\n{title}:")
            lines.extend(f"  - {item}" for item in items)
    if parsed.follow_up:
        lines.append(f"\nFollow-up: {parsed.follow_up}")
    if parsed.ideal_response:
        lines.append(f"\nIdeal Response:\n{parsed.ideal_response}")
    return "\n".join(lines)


async def run_question(
    orch: OrchestratorAgent,
    category: Category,
    history: HistoryStore,
    transcript: List[InterviewState],
) -> bool:
    """One question round; returns False when the user quits."""
    state = InterviewState()
    state.start(category.id)
    try:
        reply = await orch.fetch_question(category.name, [])
    except LLMError as e:
        state.apply(InterviewEvent.START_FAILED)
        print(f"Failed to fetch question: {e}")
        return False

    question = parse_question_response(reply.response, reply.structured)
    state.set_question(format_question_markdown(question.question), question.hints, question.difficulty)
    state.apply(InterviewEvent.QUESTION_READY)
    difficulty = f" [{question.difficulty}]" if question.difficulty else ""
    print(f"\nQ{difficulty}: {state.current_question}")

    keep_going = True
    while state.current_step == InterviewStep.INPUT:
        try:
            answer = input("Your answer: ")
        except (KeyboardInterrupt, EOFError):
            answer = "/quit"
        command = answer.strip().lower()
        if command in {"/quit", "quit", "/next", "next", "/skip"}:
            keep_going = command not in {"/quit", "quit"}
            state.apply(InterviewEvent.END)
            break
        if command == "/hint":
            hint = question.reveal_next_hint()
            print(f"Hint: {hint.text}" if hint else "No more hints.")
            continue
        if not command:
            continue

        state.record_answer(answer.strip())
        state.apply(InterviewEvent.SUBMIT)
        try:
            result = await orch.evaluate_answer(category.name, state.messages)
        except LLMError as e:
            state.messages.pop()
            state.apply(InterviewEvent.EVALUATION_FAILED)
            print(f"Failed to evaluate answer, please try again: {e}")
            continue
        state.record_evaluation(result.raw)
        state.apply(InterviewEvent.EVALUATED)
        print("\n" + render_feedback(result.parsed))

    history.record(state)
    transcript.append(state)
    return keep_going


async def run_cli(category_key: Optional[str], transcript_path: str = "session_transcript.json") -> None:
    cfg = load_config()
    setup_logging(cfg.log_level)

    category = choose_category(category_key)
    if category is None:
        print("Unknown category.")
        return

    orch = OrchestratorAgent(cfg)
    if not orch.llm_ready:
        print(f"LLM provider unavailable ({orch.llm.unavailable_reason}). Set the API key and retry.")
        return
    history = HistoryStore(cfg.history_path)
    logger.info(f"Starting practice for category={category.id}")

    print(f"Practicing {category.name}. Commands: /hint for a hint, /next for a new question, /quit to end.")
    transcript: List[InterviewState] = []
    while await run_question(orch, category, history, transcript):
        pass

    summary = orch.telemetry.summary()
    if summary:
        print("\nTiming (aggregate):")
        for name, stats in summary.items():
            print(f"- {name}: {stats['total_ms']:.0f} ms over {stats['count']:.0f} ops (~{stats['avg_ms']:.0f} ms/op)")
    print(f"History saved to {cfg.history_path}")
    if transcript:
        try:
            save_transcript_json(transcript, transcript_path)
            print(f"Saved transcript to {transcript_path}")
        except OSError as e:
            logger.error(f"Failed to save transcript to {transcript_path}: {e}")


def parse_file(path: str) -> None:
    if path == "-":
        text = sys.stdin.read()
    else:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    print(json.dumps(parse_evaluation(text).to_dict(), indent=2))


def main():
    parser = argparse.ArgumentParser(description="Technical interview practice with structured feedback")
    parser.add_argument("--category", help="category id or name, e.g. system_design")
    parser.add_argument("--parse", metavar="FILE", help="parse an evaluation text file ('-' for stdin) and exit")
    parser.add_argument(
        "--transcript", default="session_transcript.json", help="where to save the session transcript"
    )
    args = parser.parse_args()

    if args.parse:
        parse_file(args.parse)
        return
    try:
        asyncio.run(run_cli(args.category, args.transcript))
    except KeyboardInterrupt:
        print("\nSession ended.")


if __name__ == "__main__":
    main()
