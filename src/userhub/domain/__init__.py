"""Domain layer: user aggregate, role memberships and repository ports."""
