class NetworkFailure(Exception):
    """A request could not complete, or its body was not a JSON object."""

    def __init__(self, url: str, message: str):
        super().__init__(f"{message} ({url})")
        self.url = url
        self.message = message


class PartialAggregateFailure(NetworkFailure):
    """One member of a joined request set failed, invalidating the whole set."""

    def __init__(self, member: str, failure: NetworkFailure):
        super().__init__(failure.url, f"{member} request failed: {failure.message}")
        self.member = member
        self.failure = failure
