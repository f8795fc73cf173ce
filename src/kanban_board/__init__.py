"""Single-board kanban task tracker."""
