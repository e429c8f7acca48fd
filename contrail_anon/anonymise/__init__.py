from contrail_anon.anonymise.codec import decode_line, encode_line
from contrail_anon.anonymise.ip_mask import IpMask
from contrail_anon.anonymise.pipeline import process_table
from contrail_anon.anonymise.policy import hash_fq_name_segments
from contrail_anon.anonymise.transforms import UuidRecordTransformer, anonymise_fq_name_record
