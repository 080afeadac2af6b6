"""Allow-list policies combined to sanitize feed articles."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

from ..urls import has_allowed_scheme
from .validators import (
    Validator,
    accept_value,
    image_src_rewriter,
    inline_style,
    integer_value,
    video_attribute,
)

ALL_ELEMENTS = "*"

# Elements that mean nothing once they lose all their attributes
SKIP_IF_EMPTY: FrozenSet[str] = frozenset({"a", "font", "img", "span", "iframe"})

STANDARD_URL_PROTOCOLS: FrozenSet[str] = frozenset({"http", "https", "mailto"})

# Attributes whose values are URLs checked against the accepting policy's protocols
URL_ATTRIBUTES: FrozenSet[str] = frozenset({"href", "src"})


@dataclass(frozen=True)
class Policy:
    """A single allow-list rule set.

    ``attributes`` maps an element name (or ``"*"`` for every allowed
    element) to the attributes permitted on it and their validators.
    ``required_attributes`` names, per element, the attribute without which
    the element is dropped. Elements listed in ``discard_content`` lose their
    content along with their tags when dropped.
    """

    name: str
    elements: FrozenSet[str] = frozenset()
    attributes: Mapping[str, Mapping[str, Validator]] = field(default_factory=dict)
    protocols: FrozenSet[str] = frozenset()
    required_attributes: Mapping[str, str] = field(default_factory=dict)
    discard_content: FrozenSet[str] = frozenset()
    forced_attributes: Mapping[str, Mapping[str, str]] = field(default_factory=dict)

    def validators_for(self, element: str, attribute: str) -> List[Validator]:
        found = []
        for key in (element, ALL_ELEMENTS):
            validator = self.attributes.get(key, {}).get(attribute)
            if validator is not None:
                found.append(validator)
        return found


class PolicySet:
    """Union of policies: anything allowed by one of them is allowed."""

    def __init__(self, policies: Iterable[Policy]) -> None:
        self.policies: Tuple[Policy, ...] = tuple(policies)
        self.tags: FrozenSet[str] = frozenset().union(
            *(policy.elements for policy in self.policies)
        )
        self.protocols: FrozenSet[str] = frozenset().union(
            *(policy.protocols for policy in self.policies)
        )

    def __and__(self, other: Policy) -> "PolicySet":
        return PolicySet(self.policies + (other,))

    def allows_element(self, element: str) -> bool:
        return element in self.tags

    def allows_attribute(self, element: str, attribute: str, value: str) -> bool:
        """Name-level check, the value is looked at by ``validate``."""

        if not self.allows_element(element):
            return False
        return any(policy.validators_for(element, attribute) for policy in self.policies)

    def validate(self, element: str, attribute: str, value: str) -> Optional[str]:
        for policy in self.policies:
            for validator in policy.validators_for(element, attribute):
                result = validator(element, attribute, value)
                if result is None:
                    continue
                if attribute in URL_ATTRIBUTES and not has_allowed_scheme(
                    result, policy.protocols
                ):
                    continue
                return result
        return None

    def keeps(self, element: str, attributes: Iterable[str]) -> bool:
        """Whether an element carrying ``attributes`` may stay in the output."""

        names = set(attributes)
        for policy in self.policies:
            required = policy.required_attributes.get(element)
            if required is not None and required not in names:
                return False
        if element in SKIP_IF_EMPTY:
            return bool(names)
        return True

    def discards_content(self, element: str) -> bool:
        return any(element in policy.discard_content for policy in self.policies)

    def forced_attributes(self, element: str) -> Dict[str, str]:
        forced: Dict[str, str] = {}
        for policy in self.policies:
            forced.update(policy.forced_attributes.get(element, {}))
        return forced


BLOCKS_POLICY = Policy(
    name="blocks",
    elements=frozenset(
        {
            "p", "div",
            "h1", "h2", "h3", "h4", "h5", "h6",
            "ul", "ol", "li",
            "blockquote", "pre",
        }
    ),
)

FORMATTING_POLICY = Policy(
    name="formatting",
    elements=frozenset(
        {
            "b", "i", "font", "s", "u", "o", "sup", "sub", "ins", "del",
            "strong", "strike", "tt", "code", "big", "small", "br", "span", "em",
        }
    ),
)

LINKS_POLICY = Policy(
    name="links",
    elements=frozenset({"a"}),
    attributes={"a": {"href": accept_value}},
    protocols=STANDARD_URL_PROTOCOLS,
    forced_attributes={"a": {"rel": "nofollow"}},
)

STYLES_POLICY = Policy(
    name="styles",
    attributes={ALL_ELEMENTS: {"style": inline_style}},
)

VIDEO_POLICY = Policy(
    name="video",
    elements=frozenset({"iframe"}),
    attributes={
        "iframe": {
            "src": video_attribute,
            "height": video_attribute,
            "width": video_attribute,
        }
    },
    protocols=STANDARD_URL_PROTOCOLS,
    required_attributes={"iframe": "src"},
    discard_content=frozenset({"iframe"}),
)


def image_policy(base_url: str) -> Policy:
    """Images with absolute sources and integer dimensions."""

    return Policy(
        name="images",
        elements=frozenset({"img"}),
        attributes={
            "img": {
                "alt": accept_value,
                "src": image_src_rewriter(base_url),
                "border": integer_value,
                "height": integer_value,
                "width": integer_value,
            }
        },
        protocols=frozenset({"http", "https"}),
    )


def article_policy(base_url: str) -> PolicySet:
    """Compose the policy applied to feed article bodies."""

    return (
        PolicySet([BLOCKS_POLICY])
        & FORMATTING_POLICY
        & image_policy(base_url)
        & LINKS_POLICY
        & STYLES_POLICY
        & VIDEO_POLICY
    )
