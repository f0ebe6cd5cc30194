from app.models.portfolio_analysis import PortfolioAnalysis

__all__ = ["PortfolioAnalysis"]
