"""Pure building blocks: identifiers, references, graph model and config resolution."""
