# Services package init
"""
Restaurants API — Services Layer
=================================

Service Inventory:
    - RestaurantStore:    storage adapter over the MongoDB collection;
                          returns tagged StoreResults, never raises for
                          storage failures
    - RestaurantService:  maps StoreResults to response models or
                          application exceptions
"""
