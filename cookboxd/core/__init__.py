"""
Shared, cross-cutting code for the API.

`core/` should contain small building blocks that multiple features use
(DB wiring, settings, logging, errors, repository ports). Keep
feature-specific SQL and business rules in the corresponding feature
package (e.g. `recipes/`).
"""
