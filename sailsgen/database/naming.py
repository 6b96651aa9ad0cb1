"""Identity normalization for tables and columns."""

import re

_SEPARATORS = re.compile(r"[^0-9A-Za-z]+")


def _lower_first(word: str) -> str:
    return word[:1].lower() + word[1:]


def _upper_first(word: str) -> str:
    return word[:1].upper() + word[1:]


def normalize_identity(name: str) -> str:
    """Convert a table or column name to lowerCamel form.

    USER_ROLES, user_roles and userRoles all become userRoles. The result
    contains no separators and starts lower-case, so normalizing it again
    returns it unchanged.
    """
    words = []
    for word in _SEPARATORS.split(name):
        if not word:
            continue
        # Fully upper-case words (USERS, ID) are treated as plain words
        if word[0].isalpha() and word.isupper():
            word = word.lower()
        words.append(word)

    if not words:
        return ""
    return _lower_first(words[0]) + "".join(_upper_first(w) for w in words[1:])


def model_file_name(identity: str) -> str:
    """File stem for a model identity: the identity with its first letter upper-cased.

    Args:
        identity: Normalized model identity (e.g. userRoles)

    Returns:
        Stem used for the model module and its controller (e.g. UserRoles)
    """
    return _upper_first(identity)
