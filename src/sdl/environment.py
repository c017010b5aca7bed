"""Symbol table and export artifact for one evaluation run."""

from pydantic import BaseModel

from .objects import Entity, to_python


class Environment(BaseModel):
    """Flat name -> entity store. Names are bound at most once."""

    store: dict[str, Entity] = {}

    def __contains__(self, name: str) -> bool:
        return name in self.store

    def get(self, name: str) -> Entity | None:
        return self.store.get(name)

    def set(self, name: str, entity: Entity) -> Entity:
        self.store[name] = entity
        return entity

    def export(self) -> "EvaluatedValues":
        entities: dict[str, list[Entity]] = {}
        for entity in self.store.values():
            entities.setdefault(entity.class_name, []).append(entity)
        return EvaluatedValues(entities=entities)


class EvaluatedValues(BaseModel):
    """Entities grouped by class, in first-seen order."""

    entities: dict[str, list[Entity]] = {}

    def __getitem__(self, class_name: str) -> list[Entity]:
        return self.entities[class_name]

    def __contains__(self, class_name: str) -> bool:
        return class_name in self.entities

    def to_python(self) -> dict[str, list]:
        return {
            class_name: [to_python(e) for e in entities]
            for class_name, entities in self.entities.items()
        }
