from collections import deque

from dicemult.models import Action


class ActionQueue:
    """
    Turn order for queued actions. Higher Action.priority (subject AGI + item
    speed) goes first; ties keep the order they were queued in.
    """

    def __init__(self):
        self._buckets: dict[int, deque[Action]] = {}
        self._order: list[int] = []  # bucket keys, fastest first

    def enqueue(self, action: Action) -> None:
        bucket = self._buckets.get(action.priority)
        if bucket is None:
            bucket = self._buckets[action.priority] = deque()
            self._order = sorted(self._buckets, reverse=True)
        bucket.append(action)

    def _front(self) -> deque[Action] | None:
        for priority in self._order:
            if self._buckets[priority]:
                return self._buckets[priority]
        return None

    def dequeue(self) -> Action | None:
        """Next action to resolve, or None when the turn is done"""
        bucket = self._front()
        return bucket.popleft() if bucket else None

    def peek(self) -> Action | None:
        bucket = self._front()
        return bucket[0] if bucket else None

    def is_empty(self) -> bool:
        return self._front() is None

    def clear(self) -> None:
        self._buckets.clear()
        self._order = []

    def __len__(self) -> int:
        return sum(len(b) for b in self._buckets.values())
