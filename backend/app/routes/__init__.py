# Routes package init
"""
Restaurants API — Routes Package
=================================

Route Inventory:
    - restaurants.py:      POST/GET       /api/restaurants
                           GET/PUT/DELETE /api/restaurants/{id}
    - restaurant_form.py:  GET/POST       /api/restaurantForm  (HTML)
    - health.py:           GET            /health

Routes stay thin: validate via dependencies, call RestaurantService,
return a response model. Error responses come from the exception handlers
in main.py.
"""
