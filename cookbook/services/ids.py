"""Per-table identifier allocation."""

from django.db import transaction
from django.db.models import Max

from cookbook.models import IdSequence


class IdAllocator:
    """Hand out monotonically increasing ids per scope.

    The scope's counter row is locked for the rest of the caller's
    transaction, so two concurrent inserts into the same scope serialize on
    it instead of both reading the same MAX(id). Rows inserted with
    externally supplied ids are respected by taking the larger of the
    counter and the table's current maximum.
    """

    def __init__(self, sequence_model=IdSequence):
        self.sequence_model = sequence_model

    @transaction.atomic
    def next_id(self, scope, model):
        """Reserve and return the next id for ``scope`` (backed by ``model``'s pk)."""
        self.sequence_model.objects.get_or_create(scope=scope)
        seq = self.sequence_model.objects.select_for_update().get(scope=scope)
        current_max = model.objects.aggregate(top=Max("pk"))["top"] or 0
        seq.last_value = max(seq.last_value, current_max) + 1
        seq.save(update_fields=["last_value"])
        return seq.last_value
