"""Partner to owner Shopify inventory sync engine."""
