"""Use cases; at present the creation and listing of pickup points."""