from pydantic import BaseModel, ConfigDict


class Action(BaseModel):
    """Base class for every store action. Actions are immutable messages."""
    model_config = ConfigDict(frozen=True)


class FrozenState(BaseModel):
    """Base class for store slices. Reducers return new instances, never mutate."""
    model_config = ConfigDict(frozen=True)
