"""Variable interpolation for resolved templates.

Templates use {{identifier}} placeholders, where identifier is made of
letters, digits and underscores. Expressions inside the braces are not
supported.

Two explicit entry points:
- interpolate() returns a plain string.
- interpolate_styled() returns a list of segments so the caller can render
  some substituted values with presentation attributes (e.g., as styled
  spans).

A placeholder whose variable is missing or None is left verbatim,
braces included. Interpolation never raises.
"""

import re
from typing import Any, Dict, List, Mapping, Optional, Sequence

from lexicon.i18n.models import Segment, StyledSegment, TextSegment

PLACEHOLDER_PATTERN = re.compile(r"\{\{(\w+)\}\}", re.ASCII)


def _lookup(variables: Optional[Mapping[str, Any]], name: str) -> Optional[str]:
    """Get the text for a variable, or None when it is missing or None."""
    if not variables:
        return None
    value = variables.get(name)
    if value is None:
        return None
    return str(value)


def interpolate(template: str, variables: Optional[Mapping[str, Any]] = None) -> str:
    """Substitute {{identifier}} placeholders in a template.

    Args:
        template: Template with {{variable}} placeholders.
        variables: Variable name -> value.

    Returns:
        The template with every known placeholder replaced. Placeholders
        without a (non-None) value are kept as written.

    Example:
        >>> interpolate("Hello {{name}}, {{missing}}", {"name": "Ann"})
        'Hello Ann, {{missing}}'
    """
    if not template or not variables:
        return template

    def replace(match: re.Match) -> str:
        value = _lookup(variables, match.group(1))
        return match.group(0) if value is None else value

    return PLACEHOLDER_PATTERN.sub(replace, template)


def interpolate_styled(
    template: str,
    variables: Optional[Mapping[str, Any]],
    styles: Optional[Mapping[str, Mapping[str, Any]]],
) -> List[Segment]:
    """Substitute placeholders and return ordered output segments.

    Literal text between placeholders becomes a TextSegment. A substituted
    value becomes a StyledSegment when a style is registered for its
    variable name, otherwise a TextSegment. Placeholders without a value
    stay as literal TextSegments, exactly as in interpolate().

    Args:
        template: Template with {{variable}} placeholders.
        variables: Variable name -> value.
        styles: Variable name -> presentation attributes.

    Returns:
        Segments in template order. Empty literal runs are omitted.

    Example:
        >>> interpolate_styled("Hi {{name}}", {"name": "Ann"}, {"name": {"color": "red"}})
        [TextSegment(text='Hi '), StyledSegment(value='Ann', style={'color': 'red'})]
    """
    styles = styles or {}
    segments: List[Segment] = []
    last_index = 0

    for match in PLACEHOLDER_PATTERN.finditer(template):
        if match.start() > last_index:
            segments.append(TextSegment(template[last_index : match.start()]))

        name = match.group(1)
        value = _lookup(variables, name)
        style = styles.get(name)

        if value is None:
            segments.append(TextSegment(match.group(0)))
        elif style:
            segments.append(StyledSegment(value=value, style=style))
        else:
            segments.append(TextSegment(value))

        last_index = match.end()

    if last_index < len(template):
        segments.append(TextSegment(template[last_index:]))

    return segments


def render_segments(segments: Sequence[Segment]) -> str:
    """Join segments back into plain text, dropping presentation attributes."""
    return "".join(
        segment.value if isinstance(segment, StyledSegment) else segment.text
        for segment in segments
    )


def find_variables(template: str) -> List[str]:
    """List the unique placeholder names of a template in order of appearance."""
    names: Dict[str, None] = {}
    for match in PLACEHOLDER_PATTERN.finditer(template or ""):
        names[match.group(1)] = None
    return list(names)


def build_translation_params(data: Mapping[str, Any]) -> Dict[str, str]:
    """Convert arbitrary values into interpolation parameters.

    None values are dropped; everything else is converted with str().

    Example:
        >>> build_translation_params({"type": "Cup", "count": 8, "note": None})
        {'type': 'Cup', 'count': '8'}
    """
    return {key: str(value) for key, value in data.items() if value is not None}


def map_to_translation_params(
    values: Sequence[Any], keys: Sequence[str]
) -> Dict[str, str]:
    """Pair positional values with parameter names.

    Extra values or keys are ignored; None values are dropped.

    Example:
        >>> map_to_translation_params(["League", 0, True], ["type", "count", "restricted"])
        {'type': 'League', 'count': '0', 'restricted': 'True'}
    """
    return {
        key: str(value) for key, value in zip(keys, values) if value is not None
    }
