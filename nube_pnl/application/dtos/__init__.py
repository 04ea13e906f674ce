"""Application DTOs."""

from .sale_dto import SaleDTO, SaleProductDTO

__all__ = ["SaleDTO", "SaleProductDTO"]
