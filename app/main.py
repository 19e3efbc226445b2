from __future__ import annotations

import argparse
import asyncio
import json
import logging
import threading
import uuid
from typing import Callable, Optional, Sequence

from chatbot.backends import build_backend
from chatbot.core.errors import ChatbotError, ValidationError
from chatbot.core.memory import SessionStore
from chatbot.core.records import to_records
from chatbot.session import ConversationSession
from config.settings import get_settings, parse_log_level


logger = logging.getLogger("chatbot")

EXIT_COMMANDS = {"exit", "quit"}
APOLOGY = "I'm sorry, I didn't get a response. Try again?"
LOG_FORMAT = "[%(asctime)s] %(levelname)s - %(message)s"


async def _read_line(read_line: Callable[[str], str], prompt: str) -> str:
    """Run a blocking ``read_line`` on a daemon thread.

    A daemon thread left blocked in ``input()`` after Ctrl-C does not hold up
    interpreter shutdown, unlike the default executor used by ``to_thread``.
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future[str] = loop.create_future()

    def settle(result: Optional[str], error: Optional[BaseException]) -> None:
        if future.done():
            return
        if error is not None:
            future.set_exception(error)
        else:
            future.set_result(result)

    def worker() -> None:
        try:
            result = read_line(prompt)
        except BaseException as exc:
            outcome = (None, exc)
        else:
            outcome = (result, None)
        try:
            loop.call_soon_threadsafe(settle, *outcome)
        except RuntimeError:
            # loop already closed; nobody is waiting for this line
            pass

    threading.Thread(target=worker, name="chat-input", daemon=True).start()
    return await future


async def chat_loop(
    session: ConversationSession,
    session_id: str,
    read_line: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> None:
    write("Chatbot started. Type your message below:")
    while True:
        try:
            line = await _read_line(read_line, "You: ")
        except EOFError:
            write("")
            break

        text = line.strip()
        if text.lower() in EXIT_COMMANDS:
            break
        if not text:
            write("Please enter a message.")
            continue
        if text == "/history":
            transcript = session.store.get(session_id)
            if transcript is None:
                transcript = session.store.seed(session_id)
            write(json.dumps(to_records(transcript), indent=2))
            continue
        if text == "/reset":
            session.reset(session_id)
            write("Conversation reset.")
            continue

        try:
            reply = await session.reply(session_id, line)
        except ValidationError as exc:
            logger.warning("Rejected input: %s", exc)
            write("Please enter a message.")
            continue
        except ChatbotError as exc:
            logger.warning("Turn failed for session %s: %s", session_id, exc)
            write(APOLOGY)
            continue
        except Exception:
            logger.exception("Unexpected error during turn for session %s", session_id)
            write(APOLOGY)
            continue

        write(f"Assistant: {reply}")
    write("Bye.")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Chat with Gemini from the terminal.")
    parser.add_argument(
        "--session-id",
        default=None,
        help="Conversation identifier (default: a fresh random id)",
    )
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    try:
        settings = get_settings()
        log_level = parse_log_level(args.log_level) if args.log_level else settings.log_level
    except ChatbotError as exc:
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
        logger.error("Invalid configuration: %s", exc)
        return 2

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
    )

    try:
        backend = build_backend(settings)
        store = SessionStore(system_prompt=settings.system_prompt, language=settings.language)
    except ChatbotError as exc:
        logger.error("%s", exc)
        return 2

    session = ConversationSession(backend, store)
    session_id = args.session_id or str(uuid.uuid4())
    logger.info("Session id: %s", session_id)

    try:
        asyncio.run(chat_loop(session, session_id))
    except KeyboardInterrupt:
        print("\nBye.")
        return 130
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
