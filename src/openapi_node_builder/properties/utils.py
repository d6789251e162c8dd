"""String helpers shared by the property builders."""

import re

_WORD = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|[0-9]+")
_PATH_VAR = re.compile(r"\{([^}]+)\}")


def start_case(text: str) -> str:
    """Split on separators and camelCase humps, capitalize each word.

    >>> start_case("listPets")
    'List Pets'
    >>> start_case("pet_store-v2")
    'Pet Store V 2'
    """
    return " ".join(word[0].upper() + word[1:] for word in _WORD.findall(text))


def replace_path_vars_to_parameter(uri: str) -> str:
    """Turn `/pets/{petId}` into `/pets/{{$parameter["petId"]}}`."""
    return _PATH_VAR.sub(lambda m: '{{$parameter["' + m.group(1) + '"]}}', uri)
