"""
Answer prompt.

System prompt with numbered note passages, followed by the conversation
history and the new question.

Dependencies: langchain_core.prompts
System role: Prompt template for grounded answers
"""

from langchain_core.messages import BaseMessage
from langchain_core.prompts import ChatPromptTemplate, MessagesPlaceholder

from notechat.models.retrieval import AssembledContext, RetrievedPassage

NO_NOTES_FOUND = "No relevant notes found."

SYSTEM_PROMPT = """You are a helpful assistant that answers questions about the user's personal notes.

CONTEXT FROM USER'S NOTES:
{context}

INSTRUCTIONS:
- Answer based on the provided context when relevant
- If the context doesn't contain relevant information, say so clearly
- Always cite your sources using the format [1], [2], etc. when referencing the context
- Be concise but helpful
- If asked about something not in the context, provide general knowledge but clearly distinguish it

Context Summary: {context_summary}"""

ANSWER_PROMPT = ChatPromptTemplate.from_messages([
    ("system", SYSTEM_PROMPT),
    MessagesPlaceholder("history"),
    ("human", "{question}"),
])


def format_context(passages: list[RetrievedPassage]) -> str:
    """Number passages [1]..[n] with their note titles."""
    if not passages:
        return NO_NOTES_FOUND
    blocks = []
    for i, passage in enumerate(passages, start=1):
        title = passage.note_title or f"Note {passage.note_id}"
        blocks.append(f'[{i}] From "{title}":\n{passage.text.strip()}')
    return "\n\n".join(blocks)


def build_messages(
    question: str,
    context: AssembledContext,
    history: list[BaseMessage],
) -> list[BaseMessage]:
    """Render the full message list for the completion provider."""
    return ANSWER_PROMPT.invoke({
        "context": format_context(context.passages),
        "context_summary": context.summary,
        "history": history,
        "question": question,
    }).to_messages()
