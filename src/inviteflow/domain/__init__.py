"""Domain layer for InviteFlow: entities and business services."""
