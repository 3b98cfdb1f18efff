class BackendError(Exception):
    """Raised when a request to the transactions backend fails or returns an unexpected response"""
    def __init__(self, message="Backend request failed"):
        self.message = message
        super().__init__(self.message)
