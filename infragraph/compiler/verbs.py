from typing import Iterable

# Checked in order, first suffix match wins.
ACTION_VERBS = (
    "Get",
    "List",
    "Put",
    "Delete",
    "Publish",
    "Detail",
    "Manage",
)


def verb_from_action(action: str) -> str:
    """
    Reduce a compound policy action (``BucketFileGet``, ``TopicPublish``)
    to its trailing verb. Unrecognized actions come back verbatim.
    """
    for verb in ACTION_VERBS:
        if action.endswith(verb):
            return verb
    return action


def policy_label(actions: Iterable[str]) -> str:
    return ", ".join(verb_from_action(a) for a in actions)
