"""
Generateur de systemes Stryktipset
Helgarderingar, halvgarderingar et spikar a partir des pourcentages du public et de la forme
"""
__version__ = "0.1.0"
