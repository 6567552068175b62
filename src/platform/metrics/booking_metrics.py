from prometheus_client import Counter


class BookingMetrics:
    """
    Booking service metrics

    Counts every evaluated book/cancel request by outcome, and the lenient
    cancellations that had to skip a counter reversal.
    """

    def __init__(self):
        self.booking_requests = Counter(
            'booking_requests_total',
            'Total evaluated booking requests',
            ['operation', 'outcome'],  # operation: book/cancel
        )

        self.consistency_warnings = Counter(
            'booking_consistency_warnings_total',
            'Cancellations that found a missing or already-zero linked record',
            ['warning'],
        )

    def record_request(self, *, operation: str, outcome: str):
        self.booking_requests.labels(operation=operation, outcome=outcome).inc()

    def record_consistency_warning(self, *, warning: str):
        self.consistency_warnings.labels(warning=warning).inc()


# Global metrics instance
metrics = BookingMetrics()
