"""English to Spanish card names for the 78-card deck."""

MAJOR_ARCANA = {
    "The Fool": "El Loco",
    "The Magician": "El Mago",
    "The High Priestess": "La Sacerdotisa",
    "The Empress": "La Emperatriz",
    "The Emperor": "El Emperador",
    "The Hierophant": "El Hierofante",
    "The Lovers": "Los Enamorados",
    "The Chariot": "El Carro",
    "Strength": "La Fuerza",
    "The Hermit": "El Ermitaño",
    "Wheel of Fortune": "La Rueda de la Fortuna",
    "Justice": "La Justicia",
    "The Hanged Man": "El Colgado",
    "Death": "La Muerte",
    "Temperance": "La Templanza",
    "The Devil": "El Diablo",
    "The Tower": "La Torre",
    "The Star": "La Estrella",
    "The Moon": "La Luna",
    "The Sun": "El Sol",
    "Judgement": "El Juicio",
    "The World": "El Mundo",
}

_RANKS = {
    "Ace": "As",
    "Two": "Dos",
    "Three": "Tres",
    "Four": "Cuatro",
    "Five": "Cinco",
    "Six": "Seis",
    "Seven": "Siete",
    "Eight": "Ocho",
    "Nine": "Nueve",
    "Ten": "Diez",
    "Page": "Sota",
    "Knight": "Caballero",
    "Queen": "Reina",
    "King": "Rey",
}

_SUITS = {
    "Cups": "Copas",
    "Pentacles": "Oros",
    "Swords": "Espadas",
    "Wands": "Bastos",
}

MINOR_ARCANA = {
    f"{rank} of {suit}": f"{rank_es} de {suit_es}"
    for suit, suit_es in _SUITS.items()
    for rank, rank_es in _RANKS.items()
}

CARD_NAME_TRANSLATIONS = {**MAJOR_ARCANA, **MINOR_ARCANA}


def translate_card_name(english_name: str) -> str:
    """Return the Spanish display name, or the input when it is unknown."""

    return CARD_NAME_TRANSLATIONS.get(english_name, english_name)
