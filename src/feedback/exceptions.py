"""Exceptions personnalisées pour le module feedback."""

class FeedbackNotFoundException(Exception):
    """Exception levée lorsqu'un avis n'est pas trouvé."""
    def __init__(self, feedback_id: int):
        self.feedback_id = feedback_id
        self.message = f"Avis avec l'ID {feedback_id} non trouvé."
        super().__init__(self.message)

class FeedbackResponseNotFoundException(Exception):
    def __init__(self, response_id: int):
        self.response_id = response_id
        self.message = f"Réponse avec l'ID {response_id} non trouvée."
        super().__init__(self.message)

class ManagerProfileNotFoundException(Exception):
    """Le compte courant n'a pas de profil manager pour signer une réponse."""
    def __init__(self, account_id: int):
        self.account_id = account_id
        self.message = f"Aucun profil manager pour le compte {account_id}."
        super().__init__(self.message)

class FeedbackAlreadyAnsweredException(Exception):
    def __init__(self, feedback_id: int):
        self.feedback_id = feedback_id
        self.message = f"L'avis {feedback_id} a déjà une réponse."
        super().__init__(self.message)

class InvalidFeedbackResponseException(Exception):
    def __init__(self, message: str = "Le contenu de la réponse ne peut pas être vide."):
        self.message = message
        super().__init__(self.message)

class FeedbackResponseForbiddenException(Exception):
    """Seul le manager auteur d'une réponse peut la modifier ou la supprimer."""
    def __init__(self, response_id: int):
        self.response_id = response_id
        self.message = f"Vous n'êtes pas l'auteur de la réponse {response_id}."
        super().__init__(self.message)
