"""
Couche services applicatifs (cas d'utilisation).

Les services orchestrent la logique du domaine : import tabulaire,
recherche par identifiant, enrichissement des images et consultation des
metadonnees. Ils dependent des ports definis dans core/, jamais des
implementations concretes des adapters/.
"""
