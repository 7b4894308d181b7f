"""
vw flag templates.

A template is an ordinary vw argument string in which ``{name}`` stands
for the value of hyperparameter ``name`` in the point being evaluated:

    "--loss_function logistic -l {learning_rate} --l2 {l2}"

Point entries that no placeholder mentions can be appended as flags
(``-x value`` for single letter names, ``--name value`` otherwise), which
lets a space simply be keyed by vw option names.
"""

from __future__ import annotations

import re
import shlex
import string
from typing import Any, Dict, List, Mapping, Tuple

from ...errors import ConfigurationError

_FORMATTER = string.Formatter()
_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# Options that change how examples are encoded into a vw cache file, mapped
# to whether they take a value. Caches are built once, so these must not
# vary between trials.
CACHE_FLAGS: Dict[str, bool] = {
    "-b": True,
    "--bit_precision": True,
    "--hash": True,
    "-q": True,
    "--quadratic": True,
    "--cubic": True,
    "--ngram": True,
    "--skips": True,
    "--affix": True,
    "--spelling": True,
    "--ignore": True,
    "--keep": True,
    "--noconstant": False,
}


def flag_name(name: str) -> str:
    if name.startswith("-"):
        return name
    return f"-{name}" if len(name) == 1 else f"--{name}"


def format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


def flag_tokens(name: str, value: Any) -> List[str]:
    flag = flag_name(name)
    if isinstance(value, bool):
        return [flag] if value else []
    return [flag, format_value(value)]


def _split(text: str) -> List[str]:
    try:
        return shlex.split(text)
    except ValueError as exc:
        raise ConfigurationError(f"Malformed vw parameter string {text!r}: {exc}") from exc


def extract_cache_flags(tokens: List[str]) -> List[str]:
    """Subset of ``tokens`` made of cache-affecting options and their values."""
    out: List[str] = []
    i = 0
    while i < len(tokens):
        token = tokens[i]
        flag = token.split("=", 1)[0] if token.startswith("--") else token
        if flag in CACHE_FLAGS:
            if CACHE_FLAGS[flag] and "=" not in token and i + 1 < len(tokens):
                out.extend(tokens[i : i + 2])
                i += 2
                continue
            out.append(token)
        i += 1
    return out


class ParamTemplate:
    def __init__(self, template: str | None = None, append_unused: bool = False) -> None:
        self.template = (template or "").strip()
        self.append_unused = append_unused
        self.placeholders = self._parse(self.template)
        self.tokens = _split(self.template)

    @staticmethod
    def _parse(template: str) -> Tuple[str, ...]:
        try:
            parsed = list(_FORMATTER.parse(template))
        except ValueError as exc:
            raise ConfigurationError(f"Malformed parameter template {template!r}: {exc}") from exc

        names: List[str] = []
        for _, field, format_spec, conversion in parsed:
            if field is None:
                continue
            if not _NAME.match(field) or format_spec or conversion:
                raise ConfigurationError(
                    f"Placeholder {{{field}}} in {template!r} must be a bare hyperparameter name"
                )
            if field not in names:
                names.append(field)
        return tuple(names)

    def __repr__(self) -> str:
        return f"ParamTemplate({self.template!r}, append_unused={self.append_unused})"

    def render(self, point: Mapping[str, Any]) -> str:
        missing = [name for name in self.placeholders if name not in point]
        if missing:
            raise ConfigurationError(
                f"Template {self.template!r} references {missing} which the point does not define"
            )
        rendered = self.template.format_map(
            {n: shlex.quote(format_value(point[n])) for n in self.placeholders}
        )

        if not self.append_unused:
            return rendered

        extra: List[str] = []
        for name, value in point.items():
            if name in self.placeholders:
                continue
            tokens = flag_tokens(name, value)
            if tokens and extract_cache_flags(tokens):
                raise ConfigurationError(
                    f"Hyperparameter '{name}' maps to cache-affecting vw option {tokens[0]}; "
                    "set it in the template instead of searching over it"
                )
            extra.extend(tokens)

        if not extra:
            return rendered
        return " ".join(part for part in (rendered, shlex.join(extra)) if part)

    def cache_params(self) -> str:
        """Cache-affecting options of this template, for building fold caches."""
        selected = extract_cache_flags(self.tokens)
        for token in selected:
            if ParamTemplate._parse(token):
                raise ConfigurationError(
                    f"Cache-affecting option in {self.template!r} uses a placeholder ({token}); "
                    "caches are built once and cannot vary per trial"
                )
        return shlex.join(selected)
