"""Mapping between domain models and database entities."""
import abc
from typing import Any, Callable, Dict, Generic, Type, TypeVar


TModel = TypeVar("TModel")
TEntity = TypeVar("TEntity")


class BaseEntityMapper(abc.ABC, Generic[TModel, TEntity]):

    @staticmethod
    @abc.abstractmethod
    def to_entity(model_instance: TModel) -> TEntity:
        pass

    @staticmethod
    @abc.abstractmethod
    def to_model(entity: TEntity) -> TModel:
        pass


class EntityMapper:
    """Dispatches a domain model to the `to_entity` function registered for its type."""

    def __init__(self, entity_mappings: Dict[Type, Callable[[Any], Any]]):
        self.entity_mappings = entity_mappings

    def map_to_entity(self, model_instance: Any):
        mapping = self.entity_mappings.get(type(model_instance))
        if mapping is None:
            raise ValueError(f"No entity mapping found for model type: {type(model_instance).__name__}")
        return mapping(model_instance)
