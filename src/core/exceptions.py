"""Exceptions partagées entre les modules."""
from typing import Sequence


class InvalidSortFieldException(Exception):
    """Levée lorsque le champ de tri demandé n'est pas autorisé pour la liste."""
    def __init__(self, sort_by: str, allowed: Sequence[str]):
        self.sort_by = sort_by
        self.allowed = list(allowed)
        self.message = f"Champ de tri invalide: '{sort_by}'. Champs autorisés: {', '.join(allowed)}."
        super().__init__(self.message)
