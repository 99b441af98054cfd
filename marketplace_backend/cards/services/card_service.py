# cards/services/card_service.py

"""
SAVED CARD SERVICE

Rules:
- Card numbers are digits only, 13 to 19 long (spaces and dashes are stripped).
- At most settings.MAX_CARDS_PER_USER cards per user.
- card_type is unique per user (case-insensitive).
- card number is unique per user (compared on the decrypted value).
- The first card a user saves becomes the default; default is exclusive.
- Deleting the default card promotes the most recently added remaining card.
"""

from __future__ import annotations

import logging
import re

from django.conf import settings
from django.db import transaction

from cards.models import Card

from .crypto import decrypt_card_number, encrypt_card_number
from .exceptions import (
    CardDecryptionError,
    CardLimitReachedError,
    DuplicateCardNumberError,
    DuplicateCardTypeError,
    InvalidCardNumberError,
)

logger = logging.getLogger(__name__)

CARD_NUMBER_RE = re.compile(r"^\d{13,19}$")

EDITABLE_FIELDS = (
    "card_type",
    "cardholder_name",
    "expiry_date",
    "billing_address",
    "city",
    "state",
    "zip_code",
    "country",
)


def normalize_card_number(raw: str) -> str:
    number = re.sub(r"[\s-]", "", str(raw or ""))
    if not CARD_NUMBER_RE.match(number):
        raise InvalidCardNumberError("Card number must be 13 to 19 digits.")
    return number


def _number_already_saved(*, user, number: str, exclude_id=None) -> bool:
    qs = Card.objects.filter(user=user)
    if exclude_id is not None:
        qs = qs.exclude(pk=exclude_id)

    for card in qs.only("id", "card_number_hash"):
        try:
            if decrypt_card_number(card.card_number_hash) == number:
                return True
        except CardDecryptionError:
            logger.warning("Card %s could not be decrypted during duplicate check", card.id)
    return False


def _check_card_type(*, user, card_type: str, exclude_id=None) -> None:
    qs = Card.objects.filter(user=user, card_type__iexact=(card_type or "").strip())
    if exclude_id is not None:
        qs = qs.exclude(pk=exclude_id)
    if qs.exists():
        raise DuplicateCardTypeError("You already have a card of this type.")


@transaction.atomic
def add_card(*, user, card_number: str, **fields) -> Card:
    number = normalize_card_number(card_number)

    existing = Card.objects.select_for_update().filter(user=user)
    count = existing.count()
    limit = int(settings.MAX_CARDS_PER_USER)
    if count >= limit:
        raise CardLimitReachedError(f"You can only add up to {limit} cards.")

    _check_card_type(user=user, card_type=fields.get("card_type", ""))

    if _number_already_saved(user=user, number=number):
        raise DuplicateCardNumberError("This card number is already added.")

    data = {k: v for k, v in fields.items() if k in EDITABLE_FIELDS}
    card = Card.objects.create(
        user=user,
        card_number_hash=encrypt_card_number(number),
        card_number_last4=number[-4:],
        is_default=(count == 0),
        **data,
    )
    logger.info("Card %s (****%s) saved for %s", card.id, card.card_number_last4, user.email)
    return card


@transaction.atomic
def update_card(*, card: Card, card_number: str | None = None, **fields) -> Card:
    if "card_type" in fields:
        _check_card_type(user=card.user, card_type=fields["card_type"], exclude_id=card.pk)

    if card_number:
        number = normalize_card_number(card_number)
        if _number_already_saved(user=card.user, number=number, exclude_id=card.pk):
            raise DuplicateCardNumberError("This card number is already added.")
        card.card_number_hash = encrypt_card_number(number)
        card.card_number_last4 = number[-4:]

    for key, value in fields.items():
        if key in EDITABLE_FIELDS:
            setattr(card, key, value)

    card.save()
    return card


@transaction.atomic
def set_default_card(*, card: Card) -> Card:
    Card.objects.select_for_update().filter(user_id=card.user_id).exclude(pk=card.pk).update(
        is_default=False
    )
    card.is_default = True
    card.save(update_fields=["is_default", "updated_at"])
    return card


@transaction.atomic
def delete_card(*, card: Card) -> None:
    user_id = card.user_id
    was_default = card.is_default
    card.delete()

    if was_default:
        replacement = Card.objects.filter(user_id=user_id).order_by("-added_date").first()
        if replacement is not None:
            replacement.is_default = True
            replacement.save(update_fields=["is_default", "updated_at"])
