# Subsystems are imported directly, e.g. `from classloom.core.extractor import extract`.
# Nothing is re-exported here so that importing the model does not pull in
# the parser, the ORM or the web stack.
