"""Bundle entities, versions, predicates, ordering and solver variable sources."""