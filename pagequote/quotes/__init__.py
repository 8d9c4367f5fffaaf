"""Quote composition on top of page analysis results.

Turns an AnalysisResult into the customer-facing price: urgency surcharge,
notarization fee and delivery deadline come from the back-office settings.
"""
