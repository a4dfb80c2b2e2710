"""Service layer: CRUD, exam lifecycle, live classes and the AI oracles."""
