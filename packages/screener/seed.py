# packages/screener/seed.py

from typing import List

from .models import StockRecord

# Snapshot used when the cache table is empty and by the scheduled refresh
# until a live market-data feed is wired in. camelCase keys match the feed.
SEED_STOCKS = [
    {"ticker": "AAPL", "name": "Apple Inc.", "price": 178.72, "change": 2.15, "changePercent": 1.22, "marketCap": 2_800_000_000_000, "peRatio": 28.5, "dividendYield": 0.55, "rsi": 58.3, "volume": 52_438_900, "sector": "Technology", "fiftyTwoWeekHigh": 199.62, "fiftyTwoWeekLow": 164.08, "aboveFiftyDayMA": True, "aboveTwoHundredDayMA": True, "macdSignal": "bullish"},
    {"ticker": "MSFT", "name": "Microsoft Corporation", "price": 378.91, "change": -1.24, "changePercent": -0.33, "marketCap": 2_400_000_000_000, "peRatio": 35.2, "dividendYield": 0.78, "rsi": 52.1, "volume": 21_345_600, "sector": "Technology", "fiftyTwoWeekHigh": 384.30, "fiftyTwoWeekLow": 275.37, "aboveFiftyDayMA": True, "aboveTwoHundredDayMA": True, "macdSignal": "neutral"},
    {"ticker": "GOOGL", "name": "Alphabet Inc.", "price": 139.69, "change": 1.87, "changePercent": 1.36, "marketCap": 1_700_000_000_000, "peRatio": 25.8, "dividendYield": None, "rsi": 61.4, "volume": 28_901_200, "sector": "Communication Services", "fiftyTwoWeekHigh": 153.78, "fiftyTwoWeekLow": 102.21, "aboveFiftyDayMA": True, "aboveTwoHundredDayMA": True, "macdSignal": "bullish"},
    {"ticker": "AMZN", "name": "Amazon.com Inc.", "price": 151.94, "change": 3.12, "changePercent": 2.10, "marketCap": 1_500_000_000_000, "peRatio": None, "dividendYield": None, "rsi": 66.7, "volume": 45_210_300, "sector": "Consumer Discretionary", "fiftyTwoWeekHigh": 155.63, "fiftyTwoWeekLow": 101.15, "aboveFiftyDayMA": True, "aboveTwoHundredDayMA": True, "macdSignal": "bullish"},
    {"ticker": "NVDA", "name": "NVIDIA Corporation", "price": 495.22, "change": 12.45, "changePercent": 2.58, "marketCap": 1_200_000_000_000, "peRatio": 62.1, "dividendYield": 0.03, "rsi": 72.4, "volume": 41_876_500, "sector": "Technology", "fiftyTwoWeekHigh": 505.48, "fiftyTwoWeekLow": 222.97, "aboveFiftyDayMA": True, "aboveTwoHundredDayMA": True, "macdSignal": "bullish"},
    {"ticker": "META", "name": "Meta Platforms Inc.", "price": 334.92, "change": -4.08, "changePercent": -1.20, "marketCap": 860_000_000_000, "peRatio": 29.4, "dividendYield": None, "rsi": 47.9, "volume": 15_632_800, "sector": "Communication Services", "fiftyTwoWeekHigh": 354.72, "fiftyTwoWeekLow": 167.66, "aboveFiftyDayMA": False, "aboveTwoHundredDayMA": True, "macdSignal": "bearish"},
    {"ticker": "BRK.B", "name": "Berkshire Hathaway Inc.", "price": 362.45, "change": 0.87, "changePercent": 0.24, "marketCap": 790_000_000_000, "peRatio": 8.9, "dividendYield": None, "rsi": 55.0, "volume": 3_412_700, "sector": "Finance", "fiftyTwoWeekHigh": 373.34, "fiftyTwoWeekLow": 293.45, "aboveFiftyDayMA": True, "aboveTwoHundredDayMA": True, "macdSignal": "neutral"},
    {"ticker": "JPM", "name": "JPMorgan Chase & Co.", "price": 170.31, "change": 1.02, "changePercent": 0.60, "marketCap": 492_000_000_000, "peRatio": 10.4, "dividendYield": 2.45, "rsi": 63.2, "volume": 9_876_100, "sector": "Finance", "fiftyTwoWeekHigh": 172.96, "fiftyTwoWeekLow": 123.11, "aboveFiftyDayMA": True, "aboveTwoHundredDayMA": True, "macdSignal": "bullish"},
    {"ticker": "V", "name": "Visa Inc.", "price": 260.72, "change": 0.45, "changePercent": 0.17, "marketCap": 536_000_000_000, "peRatio": 30.1, "dividendYield": 0.80, "rsi": 57.6, "volume": 6_120_400, "sector": "Finance", "fiftyTwoWeekHigh": 263.25, "fiftyTwoWeekLow": 206.26, "aboveFiftyDayMA": True, "aboveTwoHundredDayMA": True, "macdSignal": "neutral"},
    {"ticker": "JNJ", "name": "Johnson & Johnson", "price": 156.74, "change": -0.92, "changePercent": -0.58, "marketCap": 377_000_000_000, "peRatio": 15.6, "dividendYield": 3.04, "rsi": 41.8, "volume": 7_234_500, "sector": "Healthcare", "fiftyTwoWeekHigh": 181.04, "fiftyTwoWeekLow": 144.95, "aboveFiftyDayMA": False, "aboveTwoHundredDayMA": False, "macdSignal": "bearish"},
    {"ticker": "UNH", "name": "UnitedHealth Group Inc.", "price": 527.12, "change": 3.64, "changePercent": 0.70, "marketCap": 487_000_000_000, "peRatio": 23.7, "dividendYield": 1.42, "rsi": 54.3, "volume": 3_012_900, "sector": "Healthcare", "fiftyTwoWeekHigh": 558.10, "fiftyTwoWeekLow": 445.68, "aboveFiftyDayMA": True, "aboveTwoHundredDayMA": True, "macdSignal": "neutral"},
    {"ticker": "PFE", "name": "Pfizer Inc.", "price": 28.91, "change": -0.34, "changePercent": -1.16, "marketCap": 163_000_000_000, "peRatio": 14.2, "dividendYield": 5.68, "rsi": 27.5, "volume": 38_456_200, "sector": "Healthcare", "fiftyTwoWeekHigh": 51.56, "fiftyTwoWeekLow": 25.20, "aboveFiftyDayMA": False, "aboveTwoHundredDayMA": False, "macdSignal": "bearish"},
    {"ticker": "XOM", "name": "Exxon Mobil Corporation", "price": 102.34, "change": -1.56, "changePercent": -1.50, "marketCap": 410_000_000_000, "peRatio": 9.8, "dividendYield": 3.71, "rsi": 38.9, "volume": 17_654_300, "sector": "Energy", "fiftyTwoWeekHigh": 120.70, "fiftyTwoWeekLow": 95.77, "aboveFiftyDayMA": False, "aboveTwoHundredDayMA": False, "macdSignal": "bearish"},
    {"ticker": "CVX", "name": "Chevron Corporation", "price": 147.86, "change": -0.78, "changePercent": -0.52, "marketCap": 279_000_000_000, "peRatio": 11.2, "dividendYield": 4.08, "rsi": 44.1, "volume": 8_543_200, "sector": "Energy", "fiftyTwoWeekHigh": 189.68, "fiftyTwoWeekLow": 139.62, "aboveFiftyDayMA": False, "aboveTwoHundredDayMA": False, "macdSignal": "neutral"},
    {"ticker": "PG", "name": "Procter & Gamble Co.", "price": 152.18, "change": 0.34, "changePercent": 0.22, "marketCap": 358_000_000_000, "peRatio": 24.9, "dividendYield": 2.47, "rsi": 59.8, "volume": 6_789_100, "sector": "Consumer Staples", "fiftyTwoWeekHigh": 158.38, "fiftyTwoWeekLow": 141.45, "aboveFiftyDayMA": True, "aboveTwoHundredDayMA": True, "macdSignal": "bullish"},
    {"ticker": "KO", "name": "The Coca-Cola Company", "price": 59.47, "change": 0.12, "changePercent": 0.20, "marketCap": 257_000_000_000, "peRatio": 23.1, "dividendYield": 3.09, "rsi": 53.6, "volume": 12_345_700, "sector": "Consumer Staples", "fiftyTwoWeekHigh": 64.99, "fiftyTwoWeekLow": 51.55, "aboveFiftyDayMA": True, "aboveTwoHundredDayMA": False, "macdSignal": "neutral"},
    {"ticker": "TSLA", "name": "Tesla Inc.", "price": 238.45, "change": -6.32, "changePercent": -2.58, "marketCap": 758_000_000_000, "peRatio": 76.3, "dividendYield": None, "rsi": 44.7, "volume": 118_234_500, "sector": "Consumer Discretionary", "fiftyTwoWeekHigh": 299.29, "fiftyTwoWeekLow": 152.37, "aboveFiftyDayMA": False, "aboveTwoHundredDayMA": True, "macdSignal": "bearish"},
    {"ticker": "CAT", "name": "Caterpillar Inc.", "price": 282.16, "change": 2.94, "changePercent": 1.05, "marketCap": 144_000_000_000, "peRatio": 16.3, "dividendYield": 1.84, "rsi": 62.8, "volume": 2_987_600, "sector": "Industrials", "fiftyTwoWeekHigh": 293.88, "fiftyTwoWeekLow": 204.04, "aboveFiftyDayMA": True, "aboveTwoHundredDayMA": True, "macdSignal": "bullish"},
    {"ticker": "NEE", "name": "NextEra Energy Inc.", "price": 58.93, "change": 0.41, "changePercent": 0.70, "marketCap": 121_000_000_000, "peRatio": 16.8, "dividendYield": 3.17, "rsi": 35.4, "volume": 11_876_300, "sector": "Utilities", "fiftyTwoWeekHigh": 87.53, "fiftyTwoWeekLow": 47.15, "aboveFiftyDayMA": False, "aboveTwoHundredDayMA": False, "macdSignal": "neutral"},
    {"ticker": "PLD", "name": "Prologis Inc.", "price": 118.27, "change": 1.33, "changePercent": 1.14, "marketCap": 109_000_000_000, "peRatio": 35.9, "dividendYield": 2.95, "rsi": 61.0, "volume": 3_456_800, "sector": "Real Estate", "fiftyTwoWeekHigh": 137.52, "fiftyTwoWeekLow": 96.64, "aboveFiftyDayMA": True, "aboveTwoHundredDayMA": False, "macdSignal": "bullish"},
    {"ticker": "LIN", "name": "Linde plc", "price": 408.63, "change": 1.97, "changePercent": 0.48, "marketCap": 198_000_000_000, "peRatio": 33.4, "dividendYield": 1.25, "rsi": None, "volume": 1_876_400, "sector": "Materials", "fiftyTwoWeekHigh": 416.42, "fiftyTwoWeekLow": 319.82, "aboveFiftyDayMA": True, "aboveTwoHundredDayMA": True, "macdSignal": "neutral"},
]


def seed_records() -> List[StockRecord]:
    return [StockRecord.model_validate(row) for row in SEED_STOCKS]
