"""
Indexer for keeping an Algolia index in sync with Kontent.ai content.

This module handles the flow:
1. Receive a signed webhook delivery with content item notifications
2. Fetch each changed item and its linked items from the Delivery API
3. Transform each item into a search record
4. Merge the records into one batch and write it to Algolia
"""
