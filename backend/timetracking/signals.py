from django.dispatch import Signal

# Sent after the transaction that opened or closed a timer commits.
# kwargs: entry, user
timer_started = Signal()
# kwargs: entry, task, user
timer_stopped = Signal()
