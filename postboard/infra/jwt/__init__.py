from .token_codec import JWTTokenCodec

__all__ = ["JWTTokenCodec"]
