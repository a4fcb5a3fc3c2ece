"""Services for reading word2vec models and querying vocabularies"""
