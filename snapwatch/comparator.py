from typing import Dict, Iterable, List


def compare_paths(previous: Iterable[str], current: List[str]) -> Dict[str, List[str]]:
    """
    Splits the paths of the last snapshot and a fresh scan into three groups.
    Returns a dict with added, deleted, common.

    added and common keep the scan's order, deleted keeps the snapshot's order.
    """
    previous_set = set(previous)
    current_set = set(current)

    added = []
    common = []
    for path in current:
        if path in previous_set:
            common.append(path)
        else:
            added.append(path)

    deleted = [path for path in previous if path not in current_set]

    return {
        "added": added,
        "deleted": deleted,
        "common": common
    }
