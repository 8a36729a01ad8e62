"""
Application Layer

Ports to the node, the voice gateway and the searcher, and the guild player
that orchestrates them.
"""
