"""
Conversation orchestrator.

Drives one chat turn through validate -> load_history -> retrieve_context ->
compose_prompt -> generate -> persist, yielding stream events as it goes.
Every turn ends with exactly one COMPLETE or ERROR event.

Failure handling per stage:
- validate: InputError ends the turn with an ERROR event and no writes
- load_history / retrieve_context: failures degrade to empty history/context
- generate: provider failure ends generation; partial text is kept
- persist: StorageError ends the turn with an ERROR event

Dependencies: langchain_core, sqlalchemy, notechat.core.retrieval, notechat.core.llm
System role: Query-path state machine
"""

import asyncio
import logging
from collections.abc import AsyncGenerator, AsyncIterator
from datetime import timedelta

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from notechat.application.adapters.chat_history_adapter import ChatHistoryAdapter
from notechat.boundary.db.base import utcnow
from notechat.boundary.db.CRUD.thread_crud import thread_crud
from notechat.boundary.db.models.message_model import MessageStatus
from notechat.configs.chat import ChatSettings
from notechat.core.conversation.prompt import build_messages
from notechat.core.conversation.stages import STAGE_ORDER, TurnStage, TurnState
from notechat.core.exceptions import InputError, StorageError, ThreadNotFoundError
from notechat.core.llm.base import CompletionProvider
from notechat.core.retrieval.context_assembler import ContextAssembler
from notechat.core.retrieval.hybrid_retriever import HybridRetriever
from notechat.models.chat import ChatTurnRequest
from notechat.models.retrieval import AssembledContext
from notechat.models.streaming import ErrorCode, StreamEvent, StreamEventType
from notechat.observability.correlation import reset_correlation_id, set_correlation_id

logger = logging.getLogger(__name__)


async def _next_increment(iterator: AsyncIterator[str]) -> str:
    return await iterator.__anext__()


class ConversationOrchestrator:
    """Runs chat turns over injected retrieval, completion, and storage collaborators."""

    def __init__(
        self,
        session_factory: async_sessionmaker,
        retriever: HybridRetriever,
        assembler: ContextAssembler,
        completion_provider: CompletionProvider,
        settings: ChatSettings,
        max_results: int | None = None,
        max_context_tokens: int | None = None,
    ) -> None:
        """
        Initialize orchestrator.

        Args:
            session_factory: Factory for per-stage database sessions
            retriever: Hybrid retriever
            assembler: Context assembler
            completion_provider: Streams answer text
            settings: Message length and history limits
            max_results: Fused-result cap for retrieval (retriever default when None)
            max_context_tokens: Context budget (assembler default when None)
        """
        self.session_factory = session_factory
        self.retriever = retriever
        self.assembler = assembler
        self.completion_provider = completion_provider
        self.settings = settings
        self.max_results = max_results
        self.max_context_tokens = max_context_tokens

    async def run_turn(
        self,
        request: ChatTurnRequest,
        cancel_event: asyncio.Event | None = None,
    ) -> AsyncGenerator[StreamEvent, None]:
        """
        Run one turn.

        Args:
            request: Thread, owner, message, and request ID
            cancel_event: Set by another task to stop generation; the text
                emitted so far is persisted with status CANCELLED

        Yields:
            StreamEvent: TOKEN events, then one COMPLETE or ERROR event
        """
        cancel_event = cancel_event or asyncio.Event()
        token = set_correlation_id(request.request_id)
        state = TurnState(request=request)
        stage = TurnStage.VALIDATE

        logger.info(
            f"{__name__}:run_turn - START thread_id={request.thread_id}, message_len={len(request.message)}"
        )
        try:
            while stage is not TurnStage.DONE:
                if cancel_event.is_set() and stage in (
                    TurnStage.LOAD_HISTORY,
                    TurnStage.RETRIEVE_CONTEXT,
                    TurnStage.COMPOSE_PROMPT,
                    TurnStage.GENERATE,
                ):
                    logger.info(f"{__name__}:run_turn - cancelled before generation at stage={stage.value}")
                    state = state.advance(status=MessageStatus.CANCELLED)
                    stage = TurnStage.PERSIST

                logger.debug(f"{__name__}:run_turn - stage={stage.value}")

                if stage is TurnStage.VALIDATE:
                    try:
                        state = await self._validate(state)
                    except InputError as e:
                        code = ErrorCode.THREAD_NOT_FOUND if isinstance(e, ThreadNotFoundError) else ErrorCode.INVALID_INPUT
                        logger.warning(f"{__name__}:run_turn - rejected: {e}")
                        yield self._error_event(state, code, e.message)
                        return
                    except StorageError as e:
                        logger.error(f"{__name__}:run_turn - validate FAILED: {e}")
                        yield self._error_event(state, ErrorCode.STORAGE_FAILED, e.message)
                        return

                elif stage is TurnStage.LOAD_HISTORY:
                    state = await self._load_history(state)

                elif stage is TurnStage.RETRIEVE_CONTEXT:
                    state = await self._retrieve_context(state)

                elif stage is TurnStage.COMPOSE_PROMPT:
                    state = state.advance(
                        prompt=build_messages(state.message, state.context, state.history)
                    )

                elif stage is TurnStage.GENERATE:
                    parts: list[str] = []
                    outcome: dict = {}
                    async for event in self._generate(state, cancel_event, parts, outcome):
                        yield event
                    state = state.advance(
                        answer="".join(parts),
                        status=outcome["status"],
                        generation_error=outcome.get("error"),
                    )

                elif stage is TurnStage.PERSIST:
                    try:
                        await self._persist(state)
                    except StorageError as e:
                        logger.error(f"{__name__}:run_turn - persist FAILED: {e}")
                        yield self._error_event(state, ErrorCode.STORAGE_FAILED, e.message)
                        return
                    yield self._terminal_event(state)

                stage = STAGE_ORDER[STAGE_ORDER.index(stage) + 1]

            logger.info(
                f"{__name__}:run_turn - END status={state.status.value if state.status else None}, "
                f"answer_len={len(state.answer)}"
            )
        finally:
            reset_correlation_id(token)

    async def _validate(self, state: TurnState) -> TurnState:
        """
        Reject empty or oversized messages and unknown threads.

        Raises:
            InputError: Message rejected
            ThreadNotFoundError: Thread missing or owned by someone else
            StorageError: Thread lookup failed
        """
        request = state.request
        message = request.message.strip()
        if not message:
            raise InputError("Message cannot be empty", field="message")
        if len(request.message) > self.settings.max_message_chars:
            raise InputError(
                f"Message exceeds {self.settings.max_message_chars} characters",
                field="message",
                details={"length": len(request.message)},
            )

        try:
            async with self.session_factory() as session:
                thread = await thread_crud.get_for_owner(session, request.thread_id, request.owner_id)
        except SQLAlchemyError as e:
            raise StorageError(f"Thread lookup failed: {e}", operation="validate") from e
        if thread is None:
            raise ThreadNotFoundError(str(request.thread_id))

        return state.advance(message=message)

    async def _load_history(self, state: TurnState) -> TurnState:
        try:
            async with self.session_factory() as session:
                adapter = ChatHistoryAdapter(state.request.thread_id, session)
                history = await adapter.get_messages(limit=self.settings.history_limit)
        except Exception as e:
            logger.warning(
                f"{__name__}:load_history - FAILED, continuing without history",
                extra={"error_type": type(e).__name__, "error_msg": str(e)},
            )
            history = []
        return state.advance(history=history)

    async def _retrieve_context(self, state: TurnState) -> TurnState:
        try:
            passages = await self.retriever.search(
                state.message,
                state.request.owner_id,
                max_results=self.max_results,
            )
            context = await self.assembler.assemble(passages, max_context_tokens=self.max_context_tokens)
        except Exception as e:
            logger.warning(
                f"{__name__}:retrieve_context - FAILED, continuing without context",
                extra={"error_type": type(e).__name__, "error_msg": str(e)},
            )
            context = AssembledContext.empty()
        return state.advance(context=context)

    async def _generate(
        self,
        state: TurnState,
        cancel_event: asyncio.Event,
        parts: list[str],
        outcome: dict,
    ) -> AsyncGenerator[StreamEvent, None]:
        """
        Stream provider output, racing each chunk against cancellation.

        Appends every emitted increment to `parts` and records the final
        status (and error message) in `outcome`.
        """
        stream = self.completion_provider.astream(state.prompt)
        iterator = stream.__aiter__()
        cancel_wait = asyncio.ensure_future(cancel_event.wait())
        next_chunk: asyncio.Future | None = None
        outcome["status"] = MessageStatus.COMPLETED

        try:
            while True:
                next_chunk = asyncio.ensure_future(_next_increment(iterator))
                done, _ = await asyncio.wait(
                    {next_chunk, cancel_wait},
                    return_when=asyncio.FIRST_COMPLETED,
                )

                if next_chunk not in done:
                    next_chunk.cancel()
                    await asyncio.wait({next_chunk})
                    outcome["status"] = MessageStatus.CANCELLED
                    logger.info(f"{__name__}:generate - cancelled after {len(parts)} increments")
                    break

                error = next_chunk.exception()
                if isinstance(error, StopAsyncIteration):
                    break
                if error is not None:
                    logger.error(
                        f"{__name__}:generate - FAILED after {len(parts)} increments - "
                        f"{type(error).__name__}: {error}"
                    )
                    outcome["status"] = MessageStatus.INTERRUPTED
                    outcome["error"] = str(error)
                    break

                text = next_chunk.result()
                if not text:
                    continue
                parts.append(text)
                yield StreamEvent(
                    event=StreamEventType.TOKEN,
                    data={"text": text, "index": len(parts) - 1, "request_id": state.request.request_id},
                )
        finally:
            cancel_wait.cancel()
            if next_chunk is not None and not next_chunk.done():
                next_chunk.cancel()
                await asyncio.wait({next_chunk})
            aclose = getattr(stream, "aclose", None)
            if aclose is not None:
                await aclose()

    async def _persist(self, state: TurnState) -> None:
        """
        Store the user message, the assistant message when any text exists,
        and bump the thread's activity timestamp.

        Raises:
            StorageError: Write failed (transaction rolled back)
        """
        request = state.request
        async with self.session_factory() as session:
            try:
                adapter = ChatHistoryAdapter(request.thread_id, session)
                user_at = utcnow()
                await adapter.add_user_message(state.message, created_at=user_at)

                if state.answer:
                    await adapter.add_ai_message(
                        state.answer,
                        citations=[c.model_dump(mode="json") for c in state.context.citations],
                        metadata={
                            "context_summary": state.context.summary,
                            "request_id": request.request_id,
                            "status": state.status.value,
                        },
                        status=state.status,
                        created_at=max(utcnow(), user_at + timedelta(microseconds=1)),
                    )

                await thread_crud.touch(session, request.thread_id)
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                raise StorageError(
                    f"Failed to persist turn: {e}",
                    operation="persist_turn",
                    details={"thread_id": str(request.thread_id)},
                ) from e

        logger.info(
            f"{__name__}:persist - user message stored, assistant message "
            f"{'stored' if state.answer else 'skipped'} (status={state.status.value})"
        )

    def _terminal_event(self, state: TurnState) -> StreamEvent:
        if state.status is MessageStatus.INTERRUPTED:
            return self._error_event(
                state,
                ErrorCode.GENERATION_FAILED,
                f"Answer generation failed: {state.generation_error}",
                partial_answer=state.answer,
            )
        return StreamEvent(
            event=StreamEventType.COMPLETE,
            data={
                "request_id": state.request.request_id,
                "full_answer": state.answer,
                "citations": [c.model_dump(mode="json") for c in state.context.citations],
                "context_summary": state.context.summary,
                "status": state.status.value,
            },
        )

    @staticmethod
    def _error_event(state: TurnState, code: ErrorCode, message: str, **extra) -> StreamEvent:
        return StreamEvent.error(code, message, request_id=state.request.request_id, **extra)
