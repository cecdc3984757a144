"""
Status matching for pods and jobs

A pod matches when one of its containers is waiting or terminated with a
reason in the filter set. A job matches once per condition whose type is in
the filter set.
"""

from typing import AbstractSet, Any, List, Optional, Tuple


def _reason(sub_state: Any) -> Optional[str]:
    if sub_state is None:
        return None
    return getattr(sub_state, "reason", None)


def container_reason(state: Any) -> Optional[str]:
    """Return the waiting or terminated reason of a container state, if any"""
    if state is None:
        return None
    waiting = getattr(state, "waiting", None)
    if waiting is not None:
        return _reason(waiting)
    return _reason(getattr(state, "terminated", None))


def matches(state: Any, statuses: AbstractSet[str]) -> bool:
    """Check whether a container state is waiting or terminated with an accepted reason"""
    if not statuses:
        return False
    reason = container_reason(state)
    return reason is not None and reason in statuses


def matching_containers(pod: Any, statuses: AbstractSet[str]) -> List[Tuple[str, str]]:
    """Return the (name, reason) pairs of every matching container in a pod"""
    if not statuses or pod.status is None:
        return []

    found = []
    for container_status in pod.status.container_statuses or []:
        if matches(container_status.state, statuses):
            found.append((container_status.name, container_reason(container_status.state)))
    return found


def matching_job_conditions(job: Any, statuses: AbstractSet[str]) -> List[str]:
    """Return the type of every job condition in the filter set, duplicates included"""
    if not statuses or job.status is None:
        return []
    return [
        condition.type
        for condition in job.status.conditions or []
        if condition.type in statuses
    ]
