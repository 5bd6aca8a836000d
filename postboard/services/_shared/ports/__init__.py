from .token_codec import TokenClaims, TokenCodec, TokenKind

__all__ = ["TokenClaims", "TokenCodec", "TokenKind"]
