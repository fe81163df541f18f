# v2pager/interfaces/count_sink.py

class CountSink:
    """Receives the side-channel count reported with a successfully loaded page."""

    def update(self, count: int) -> None:
        """
        Accept the latest count (e.g. unread notifications).

        Called only after a successful fetch that reported a count. Must be
        safe to call repeatedly and must not raise.
        """
        raise NotImplementedError("Subclasses must implement this method")
