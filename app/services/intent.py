"""Question intent helpers for the chat widget."""

LIST_PHRASES = (
    "what services",
    "what products",
    "list",
    "tell me about",
    "all services",
    "all products",
    "everything",
    "overview",
    "what do you provide",
    "what do you offer",
    "what do you have",
    "types of",
    "kinds of",
    "variety of",
)


def is_list_request(question: str) -> bool:
    """True when the visitor wants a category enumerated, not one fact."""
    q = (question or "").lower()
    return any(phrase in q for phrase in LIST_PHRASES)


def is_category_related(question: str, categories: list) -> bool:
    """Does the question touch any of the website's configured categories?

    Either string containing the other counts, as does any pair of words
    longer than three characters where one contains the other.
    """
    if not question or not isinstance(categories, (list, tuple)):
        return False

    q = question.lower()
    q_words = [w for w in q.split() if len(w) > 3]

    for category in categories:
        if not isinstance(category, str):
            continue
        c = category.lower()
        if c in q or q in c:
            return True
        for c_word in c.split():
            if len(c_word) <= 3:
                continue
            if any(c_word in q_word or q_word in c_word for q_word in q_words):
                return True
    return False
