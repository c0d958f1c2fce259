"""Pure modules of elixir_rdf: the RDF builders."""
