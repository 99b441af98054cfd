"""
PATH: contacts/models/contact_info.py

Site-wide contact details and platform deposit details, edited from the
back-office. A single row (pk=1); ContactInfo.load() creates it on first use.
"""

from django.conf import settings
from django.db import models

# recharge method -> (address field, QR field)
DEPOSIT_FIELDS = {
    "crypto_usdt_erc20": ("wallet_erc20_code", "usdt_wallet_erc20"),
    "crypto_usdt_trc20": ("wallet_trc20_code", "usdt_wallet_trc20"),
    "crypto_btc": ("btc_wallet_code", "btc_wallet"),
    "crypto_eth": ("eth_wallet_code", "eth_wallet"),
}


class ContactInfo(models.Model):
    SINGLETON_PK = 1

    address = models.CharField(max_length=500, blank=True, default="")
    phone = models.CharField(max_length=40, blank=True, default="")
    email = models.EmailField(blank=True, default="")
    whatsapp = models.CharField(max_length=40, blank=True, default="")
    paypal = models.CharField(max_length=255, blank=True, default="")
    qr_paypal = models.URLField(max_length=500, blank=True, default="")

    wallet_trc20_code = models.CharField(max_length=255, blank=True, default="")
    usdt_wallet_trc20 = models.URLField(max_length=500, blank=True, default="")
    wallet_erc20_code = models.CharField(max_length=255, blank=True, default="")
    usdt_wallet_erc20 = models.URLField(max_length=500, blank=True, default="")
    btc_wallet_code = models.CharField(max_length=255, blank=True, default="")
    btc_wallet = models.URLField(max_length=500, blank=True, default="")
    eth_wallet_code = models.CharField(max_length=255, blank=True, default="")
    eth_wallet = models.URLField(max_length=500, blank=True, default="")

    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "contact info"
        verbose_name_plural = "contact info"

    def save(self, *args, **kwargs):
        self.pk = self.SINGLETON_PK
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise NotImplementedError("ContactInfo is a singleton and cannot be deleted")

    @classmethod
    def load(cls) -> "ContactInfo":
        obj, _ = cls.objects.get_or_create(pk=cls.SINGLETON_PK)
        return obj

    def deposit_details(self, method: str) -> dict:
        """Address + QR image for a crypto recharge method; blanks when not configured."""
        address_field, qr_field = DEPOSIT_FIELDS.get(method, (None, None))
        if address_field is None:
            return {"address": "", "qr": ""}
        return {"address": getattr(self, address_field), "qr": getattr(self, qr_field)}

    def __str__(self):
        return "Site contact info"
