"""Contract shared by every cipher in the collection."""

from abc import ABC, abstractmethod


class Cipher(ABC):
    """
    A keyed, text-in text-out cipher.

    The key is fixed at construction; a constructor that returns has
    produced a usable cipher, so encrypt/decrypt never re-validate it.
    """

    @abstractmethod
    def encrypt(self, plaintext: str) -> str:
        """Encrypt ``plaintext`` with the instance's key."""

    @abstractmethod
    def decrypt(self, ciphertext: str) -> str:
        """Decrypt ``ciphertext`` with the instance's key."""
