"""Adapters translating domain ports into Huawei Cloud REST calls."""
