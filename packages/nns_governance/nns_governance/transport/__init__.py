from .decoding import decode_info_response, decode_list_response

__all__ = ["decode_info_response", "decode_list_response"]
