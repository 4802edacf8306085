"""Pure domain logic: model, reconciliation and recurrence."""
