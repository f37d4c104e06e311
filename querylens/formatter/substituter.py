"""
Positional placeholder substitution.

Bindings arrive in the exact left-to-right order their ``?`` markers appear
in the statement, so the Nth binding always fills the Nth marker. The scan
only moves forward: text that was just inserted is never searched again,
so a rendered value containing ``?`` cannot swallow the next binding.
"""

from collections.abc import Sequence
from typing import Any

from querylens.core.exceptions import QueryLensError, SubstitutionError
from querylens.core.interfaces import ParameterResolver
from querylens.core.models import PlaceholderBinding, StatementCall
from querylens.formatter.renderer import render_value
from querylens.formatter.resolver import AttributeParameterResolver

PLACEHOLDER_MARKER = "?"

_default_resolver = AttributeParameterResolver()


def substitute_placeholders(
    text: str,
    bindings: Sequence[PlaceholderBinding],
    call: StatementCall,
    resolver: ParameterResolver | None = None,
    marker: str = PLACEHOLDER_MARKER,
) -> str:
    """
    Replace each placeholder marker in ``text`` with its rendered binding value.

    Args:
        text: Statement text, usually already normalized.
        bindings: Placeholder bindings in statement order.
        call: The intercepted call supplying the parameter payload and the
              pre-resolved additional parameters.
        resolver: Strategy for atomic detection and property access.
        marker: The positional placeholder token.

    Returns:
        The substituted text, or ``text`` untouched when there is nothing
        to bind.

    Raises:
        SubstitutionError: If a value cannot be resolved or no marker is
                           left for a binding.
    """
    if not bindings or call.parameter is None:
        return text

    resolver = resolver or _default_resolver
    pieces: list[str] = []
    cursor = 0

    for position, binding in enumerate(bindings):
        value = resolve_binding_value(binding, call, resolver, position)
        rendered = render_value(value)

        index = text.find(marker, cursor)
        if index < 0:
            raise SubstitutionError(
                f"No placeholder left for binding #{position} ({binding.property_name!r})",
                property_name=binding.property_name,
                position=position,
            )
        pieces.append(text[cursor:index])
        pieces.append(rendered)
        cursor = index + len(marker)

    pieces.append(text[cursor:])
    return "".join(pieces)


def resolve_binding_value(
    binding: PlaceholderBinding,
    call: StatementCall,
    resolver: ParameterResolver,
    position: int = -1,
) -> Any:
    """
    Resolve the value one binding contributes to the statement.

    Output-only bindings are never resolved and contribute None, so they
    still occupy their placeholder and render as ``null``.
    """
    if binding.is_output_only:
        return None

    name = binding.property_name
    if call.has_additional_parameter(name):
        return call.get_additional_parameter(name)

    payload = call.parameter
    if payload is None:
        return None

    try:
        if resolver.is_atomic(payload):
            return payload
        return resolver.get_property(payload, name)
    except SubstitutionError as e:
        e.position = position
        e.details["position"] = position
        raise
    except QueryLensError:
        raise
    except Exception as e:
        raise SubstitutionError(
            f"Failed to resolve {name!r} on {type(payload).__name__}: {e}",
            property_name=name,
            position=position,
        ) from e
