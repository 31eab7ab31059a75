# Services package.
#
#   article_service  article CRUD, comments, favorites and the feed
#   user_service     user creation, profiles and follows
#   slug             unique slug generation for article titles
#
# Services receive their repositories through the constructor, so the
# router layer (via ``conduit.dependencies``) decides which session they
# share and where the transaction boundary is.
