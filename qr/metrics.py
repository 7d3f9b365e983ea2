from prometheus_client import Counter

VISITS = Counter(
    'evermore_qr_visits_total',
    'Visits recorded on QR codes',
    ['outcome'],
)
TRACKING_FAILURES = Counter(
    'evermore_qr_tracking_failures_total',
    'Visits that could not be recorded',
)
