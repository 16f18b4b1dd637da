"""Application layer – scheduler, engines and collaborator ports."""
