"""PageQuote: page density analysis and pricing for uploaded documents."""
