"""Helpers for choosing endpoints and models."""

import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Union

from .models import Endpoint


def get_candidate_title_endpoint(
    endpoints: Sequence[Endpoint],
    current: Optional[Endpoint],
    rng: Optional[random.Random] = None,
) -> Optional[Endpoint]:
    """Pick the endpoint used to auto-title a conversation.

    Args:
        endpoints: All configured endpoints
        current: Endpoint the conversation uses
        rng: Random source, for reproducible picks

    Returns:
        ``current`` if it opts into title generation, else a random
        non-system endpoint that does, else None
    """
    if current is not None and current.gen_title:
        return current

    candidates = [e for e in endpoints if e.gen_title and not e.is_system]
    if not candidates:
        return None
    return (rng or random).choice(candidates)


@dataclass
class ModelEntry:
    """A model offered to the user."""

    name: str
    display_name: str
    available: bool = True


def collect_models(
    default_models: Sequence[Union[str, ModelEntry]],
    custom_models: str,
) -> List[ModelEntry]:
    """Apply a comma-separated custom model list to the default models.

    Each item of ``custom_models`` is one of:

    - ``name`` or ``+name``: make the model available, adding it if unknown
    - ``-name``: hide the model
    - ``name=Display Name``: also set its display name
    - ``-all`` / ``+all``: hide or show every model known so far

    Args:
        default_models: Built-in models, as names or entries
        custom_models: Custom model list, e.g. ``"-all,+gpt-4o,my-model=Mine"``

    Returns:
        Models in first-seen order
    """
    table: Dict[str, ModelEntry] = {}
    for model in default_models:
        if isinstance(model, ModelEntry):
            table[model.name] = ModelEntry(model.name, model.display_name, model.available)
        else:
            table[model] = ModelEntry(model, model, True)

    for item in (v.strip() for v in custom_models.split(",")):
        if not item:
            continue
        available = not item.startswith("-")
        body = item[1:] if item[0] in "+-" else item
        name, _, display_name = body.partition("=")
        name = name.strip()
        if name == "all":
            for entry in table.values():
                entry.available = available
        elif name:
            table[name] = ModelEntry(name, display_name.strip() or name, available)

    return list(table.values())


def available_model_names(models: Sequence[ModelEntry]) -> List[str]:
    return [m.name for m in models if m.available]
