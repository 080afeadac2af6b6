"""html5lib filter applying policy decisions bleach cannot express."""

from __future__ import annotations

from collections import defaultdict
from html import unescape
from typing import Any, Dict, Iterator, List

from bleach.html5lib_shim import Filter

from .policies import PolicySet

# Raw text containers removed together with everything they hold
DISCARDED_ELEMENTS = frozenset(
    {"script", "style", "noscript", "template", "xmp", "noembed", "noframes"}
)

Token = Dict[str, Any]


class PolicyFilter(Filter):
    """Run the attribute validators on the tokens bleach let through.

    Attribute values are replaced by what the validators return, elements
    left without their required attributes are dropped, and forced
    attributes such as ``rel="nofollow"`` are added.
    """

    def __init__(self, source, policy: PolicySet) -> None:
        super().__init__(source)
        self.policy = policy

    def __iter__(self) -> Iterator[Token]:
        open_elements: Dict[str, List[bool]] = defaultdict(list)
        discarding = None
        depth = 0

        for token in super().__iter__():
            token_type = token["type"]

            if discarding is not None:
                if token.get("name") == discarding:
                    if token_type == "StartTag":
                        depth += 1
                    elif token_type == "EndTag":
                        depth -= 1
                        if depth == 0:
                            discarding = None
                continue

            if token_type in ("StartTag", "EmptyTag"):
                name = token["name"]
                kept = name not in DISCARDED_ELEMENTS and self.apply_policy(token)
                if kept:
                    if token_type == "StartTag":
                        open_elements[name].append(True)
                    yield token
                elif token_type == "StartTag":
                    if name in DISCARDED_ELEMENTS or self.policy.discards_content(name):
                        discarding, depth = name, 1
                    else:
                        open_elements[name].append(False)
                continue

            if token_type == "EndTag":
                stack = open_elements[token["name"]]
                if stack and not stack.pop():
                    continue

            yield token

    def apply_policy(self, token: Token) -> bool:
        """Validate the attributes of a start tag, return False to drop it."""

        name = token["name"]
        attributes = {}
        for (namespace, attribute), value in token.get("data", {}).items():
            # Values arrive with their character references undecoded.
            validated = self.policy.validate(name, attribute, unescape(value))
            if validated is not None:
                attributes[(namespace, attribute)] = validated.replace("&", "&amp;")

        if not self.policy.keeps(name, (attribute for _, attribute in attributes)):
            return False

        for attribute, value in self.policy.forced_attributes(name).items():
            attributes[(None, attribute)] = value
        token["data"] = attributes
        return True
