# Services package init
"""
Biodex Backend — Services Layer
=================================

What:  Business logic between routes (HTTP) and the database.

Service Inventory:
    - SpeciesService: list, get, owner-only update and delete
    - ProfileService: users list

Routes and SqlDataStore both call these, so the ownership rule lives in
exactly one place.
"""
