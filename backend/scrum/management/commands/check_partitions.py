from django.core.management.base import BaseCommand
from django.db.models import Count

from scrum.models import Task
from scrum.ordering import is_contiguous
from scrum.services import TaskService


class Command(BaseCommand):
    help = 'Reports task partitions whose order values are not 0..n-1 and optionally repairs them'

    def add_arguments(self, parser):
        parser.add_argument(
            '--fix',
            action='store_true',
            help='Re-sequence broken partitions keeping their current order',
        )
        parser.add_argument(
            '--project',
            type=int,
            help='Only check partitions of this project id',
        )

    def handle(self, *args, **options):
        partitions = Task.objects.values('project_id', 'sprint_id').annotate(size=Count('id')).order_by(
            'project_id', 'sprint_id'
        )
        if options['project']:
            partitions = partitions.filter(project_id=options['project'])

        service = TaskService()
        broken = 0
        for partition in partitions:
            key = (partition['project_id'], partition['sprint_id'])
            orders = Task.objects.partition(*key).values_list('order', flat=True)
            if is_contiguous(orders):
                continue

            broken += 1
            self.stdout.write(self.style.WARNING(
                f"Partition project={key[0]} sprint={key[1] or 'backlog'} has orders {sorted(orders)}"
            ))
            if options['fix']:
                changed = service.resequence_partition(*key)
                self.stdout.write(self.style.SUCCESS(f"  re-sequenced, {changed} task(s) updated"))

        if broken == 0:
            self.stdout.write(self.style.SUCCESS(f"All {len(partitions)} partition(s) are contiguous"))
        elif not options['fix']:
            self.stdout.write(self.style.ERROR(f"{broken} partition(s) need repair; run with --fix"))
