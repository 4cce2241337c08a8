from dataclasses import dataclass


# Transition commands returned by action handlers
@dataclass(frozen=True)
class SetIndex:
    index: int


@dataclass(frozen=True)
class Stop:
    pass


@dataclass(frozen=True)
class ActionContext:
    """What an action handler gets to look at. Handlers never touch the paginator."""
    index: int
    page_count: int
    values: tuple = ()


class NavigationState:
    def __init__(self, index=0):
        self.index = index

    def apply(self, transition, page_count):
        """Apply a transition and return True if it asked the session to stop."""
        if transition is None:
            return False

        if isinstance(transition, Stop):
            return True

        if isinstance(transition, SetIndex):
            if not 0 <= transition.index < page_count:
                raise ValueError(f"page index {transition.index} out of range for {page_count} pages")
            self.index = transition.index
            return False

        raise TypeError(f"unknown transition: {transition!r}")
