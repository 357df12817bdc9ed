from django.dispatch import Signal

# Sent after a task move commits.
# kwargs: task, source (project_id, sprint_id), destination (project_id, sprint_id), user
task_moved = Signal()
