"""
The ALGCOMPARISON layer holds the plugins the host application discovers and
configures through the shared `Parameters` store:

- `score`: score wrappers, producing a `Score` for one data set,
- `simulation`: simulations, producing data sets and a ground-truth graph.
"""
