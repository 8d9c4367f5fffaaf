"""Document pagination and pricing estimator.

Public entry points::

    from pagequote.analysis.fast import fast_estimate
    from pagequote.analysis.deep import deep_estimate
    from pagequote.analysis.worker import AnalysisWorker
"""
