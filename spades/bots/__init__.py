"""Bot AI players for Spades.

Available bots:
- RandomBot: Plays random legal cards
- RuleBasedBot: Heuristic bidding and play with card memory and disposition
"""

from spades.bots.base_bot import BaseBot, BidDecision
from spades.bots.random_bot import RandomBot
from spades.bots.rule_based_bot import RuleBasedBot

__all__ = ["BaseBot", "BidDecision", "RandomBot", "RuleBasedBot"]
