"""
causalcompare: plugins for causal-structure discovery and algorithm
comparison (scores, simulations, parameter editors) and a desktop host.
"""
