"""
Answer chain prompt templates.

Defines the grounded answer prompt and the optional keyword-extraction
prompt used to reformulate retrieval queries.

Dependencies: langchain_core.prompts
System role: Prompt templates for the answer chain
"""

from langchain_core.prompts import ChatPromptTemplate

from corpus_qa.models.chunk import RetrievalResult

SYSTEM_PROMPT = """You answer questions about a private document collection.

## Instructions
1. Use ONLY the provided context to answer the question
2. If the context doesn't contain the answer, say that you don't know
3. Do not make up facts that are not in the context
4. Be concise"""

ANSWER_PROMPT = ChatPromptTemplate.from_messages([
    ("system", SYSTEM_PROMPT),
    ("human", """Use the following context to answer the question:
{context}

Question: {query}"""),
])

KEYWORD_PROMPT = ChatPromptTemplate.from_messages([
    ("system", "You extract search keywords. Reply with a comma-separated list of keywords only."),
    ("human", "Extract the most important keywords from this question:\n{query}"),
])

KEYWORD_QUERY_PREFIX = "Find information about: "

NO_CONTEXT_TEXT = "No relevant context found."


def format_context(results: RetrievalResult) -> str:
    """
    Concatenate retrieved chunk texts in retrieval order.

    Args:
        results: Retrieved chunks, best first

    Returns:
        str: Context block separated by blank lines
    """
    if not results:
        return NO_CONTEXT_TEXT
    return "\n\n".join(result.chunk.text for result in results)


def build_keyword_query(keywords_text: str) -> str | None:
    """
    Turn a model keyword reply into a retrieval query sentence.

    Args:
        keywords_text: Comma- or newline-separated keywords

    Returns:
        str | None: Query sentence, or None when no keywords were found
    """
    keywords = [
        keyword.strip(" \t-*•.\"'")
        for line in keywords_text.splitlines()
        for keyword in line.split(",")
    ]
    keywords = [keyword for keyword in keywords if keyword]
    if not keywords:
        return None
    return KEYWORD_QUERY_PREFIX + ", ".join(keywords)
