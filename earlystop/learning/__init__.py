"""Online early stopping for live training loops.

- EarlyStopper: stateful wrapper around one criterion or a Disjunction
- Observers: diagnostic sinks for verbose runs
- Trainer: a torch loop that consults an EarlyStopper every epoch
"""
